"""Inspect commands -- examine the IR extracted from a Swagger 2.0 document.

Provides the ``swagts inspect`` sub-command group with read-only commands
for viewing what the extractor produces: operations (with their synthesized
names and parameter shapes) and definitions. Output is a table, or the raw
IR as JSON when ``--json`` is active.
"""

from __future__ import annotations

import typer

from swagts.exceptions import SwagtsError
from swagts.generator.typescript import render_type
from swagts.models import ObjectType, ParsedSpec, TypeNode
from swagts.output import OutputFormat, error, get_output


inspect_app = typer.Typer(no_args_is_help=True)

_MAX_LISTED_PROPERTIES = 5


def _load_parsed_spec(source: str) -> ParsedSpec:
    """Load and extract *source*, exiting with the error's code on failure."""
    from swagts.parser import extract_spec, load_spec

    try:
        return extract_spec(load_spec(source))
    except SwagtsError as exc:
        error(f"Failed to load spec: {exc}")
        raise typer.Exit(code=exc.exit_code) from None


def _property_names(node: TypeNode | None) -> str:
    if not isinstance(node, ObjectType) or not node.properties:
        return "-"
    names = [
        name if child.required else f"{name}?"
        for name, child in node.properties.items()
    ]
    if len(names) > _MAX_LISTED_PROPERTIES:
        return ", ".join(names[:_MAX_LISTED_PROPERTIES]) + ", ..."
    return ", ".join(names)


def _one_line(node: TypeNode | None, empty: str = "any") -> str:
    if node is None:
        return "-"
    return " ".join(render_type(node, empty=empty).split())


@inspect_app.command("operations")
def inspect_operations(
    spec: str = typer.Argument(..., help="Swagger 2.0 document: file path, URL, or '-'."),
) -> None:
    """List the operations that will be generated.

    Deprecated operations are skipped, exactly as ``swagts generate`` does.

    Example::

        swagts inspect operations petstore.yaml
    """
    parsed = _load_parsed_spec(spec)
    output = get_output()

    if output.format == OutputFormat.JSON:
        output.print_json(
            [op.model_dump(mode="json", by_alias=True) for op in parsed.operations]
        )
        return

    headers = ["Name", "Method", "Path", "Path params", "Query params", "Body", "Response"]
    rows: list[list[str]] = []
    for op in parsed.operations:
        rows.append([
            op.name,
            op.method.value.upper(),
            op.path,
            _property_names(op.path_parameter),
            _property_names(op.query_parameter),
            _one_line(op.body_parameter),
            _one_line(op.response, empty="void"),
        ])

    output.print_table(
        headers, rows, title=f"{parsed.info.title} -- Operations ({len(rows)})"
    )


@inspect_app.command("definitions")
def inspect_definitions(
    spec: str = typer.Argument(..., help="Swagger 2.0 document: file path, URL, or '-'."),
) -> None:
    """List the definitions that will be generated.

    Shows each definition's IR kind and up to five property names
    (optional properties are suffixed with ``?``).

    Example::

        swagts inspect definitions petstore.yaml
    """
    parsed = _load_parsed_spec(spec)
    output = get_output()

    if output.format == OutputFormat.JSON:
        output.print_json(
            [d.model_dump(mode="json", by_alias=True) for d in parsed.definitions]
        )
        return

    rows = [
        [d.name, d.schema_.kind, _property_names(d.schema_)]
        for d in parsed.definitions
    ]
    output.print_table(
        ["Name", "Kind", "Properties"],
        rows,
        title=f"{parsed.info.title} -- Definitions ({len(rows)})",
    )
