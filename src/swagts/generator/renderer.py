"""Render a :class:`~swagts.models.ParsedSpec` into TypeScript source files.

The rendering process:

1. A Jinja2 environment is created for this call only, configured from the
   :class:`~swagts.models.RenderConfig` passed in.  Filters that depend on
   configuration (``ts_type``, ``normalize_case``, ``ts_path``) close over
   that config, so nothing is registered globally and several render passes
   with different settings can run in one process.
2. Every definition and operation has its references checked against the
   definition names; a dangling reference raises
   :class:`~swagts.exceptions.UnresolvedReferenceError`.
3. Templates from ``generator/templates/`` (or the source overrides on the
   config) are rendered into :class:`~swagts.models.GeneratedFile` objects.

Writing the files is left to :mod:`swagts.generator.writer`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateError, select_autoescape

from swagts.exceptions import RenderError, UnresolvedReferenceError
from swagts.generator.typescript import (
    collect_references,
    property_access,
    render_type,
    ts_identifier,
)
from swagts.models import (
    DefinitionSchema,
    GeneratedFile,
    OperationSchema,
    ParsedSpec,
    RenderConfig,
    TypeNode,
)
from swagts.parser.naming import normalize_case, to_pascal_case

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the bundled Jinja2 template directory (``generator/templates/``)."""

API_REQUEST_FILENAME = "APIRequest.ts"


def render_files(
    spec: ParsedSpec,
    config: RenderConfig,
    dist: str | Path,
) -> list[GeneratedFile]:
    """Render every file for *spec* under *dist*.

    The result always starts with ``APIRequest.ts``, followed by one file per
    definition (under ``config.definition_dir``) and one per operation
    (under ``config.operation_dir``), in document order.

    Args:
        spec: The extracted IR.
        config: Rendering options (naming convention, directories, template
            overrides).
        dist: Output root. Relative paths are kept relative; the writer
            resolves them against the working directory.

    Returns:
        The rendered files, not yet written.

    Raises:
        UnresolvedReferenceError: If any type refers to an unknown definition.
        RenderError: If a template fails to compile or render.
    """
    root = Path(dist)
    env = create_environment(config)
    known = {d.name for d in spec.definitions}

    definition_template = _load_template(
        env, "definition.ts.j2", config.definition_template
    )
    operation_template = _load_template(
        env, "operation.ts.j2", config.operation_template
    )

    files = [
        GeneratedFile(
            path=root / API_REQUEST_FILENAME,
            content=_render(env.get_template("api_request.ts.j2"), {}, "APIRequest"),
        )
    ]

    for definition in spec.definitions:
        files.append(
            GeneratedFile(
                path=root / config.definition_dir / f"{ts_identifier(definition.name)}.ts",
                content=render_definition(definition_template, definition, known),
            )
        )

    seen_operations: set[str] = set()
    for operation in spec.operations:
        filename = f"{ts_identifier(operation.name)}.ts"
        if filename in seen_operations:
            logger.warning(
                "Operation name %s is used more than once; %s %s overwrites it",
                operation.name,
                operation.method.value.upper(),
                operation.path,
            )
        seen_operations.add(filename)
        files.append(
            GeneratedFile(
                path=root / config.operation_dir / filename,
                content=render_operation(operation_template, operation, known, config),
            )
        )

    return files


def create_environment(config: RenderConfig) -> Environment:
    """Create a Jinja2 environment whose filters are bound to *config*.

    The environment uses a :class:`~jinja2.FileSystemLoader` pointing at
    the ``templates/`` directory alongside this module. Autoescape is
    disabled since the output is TypeScript, not HTML. Block trimming and
    lstrip are enabled for cleaner template authoring.

    Filters:

    * ``ts_type(node, empty="any")`` -- TypeScript type expression.
    * ``normalize_case(name)`` -- apply the configured naming convention.
    * ``ts_path(path, target)`` -- path template to a template literal
      reading parameters from *target*.
    * ``pascal(name)`` / ``identifier(name)`` -- naming helpers.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(enabled_extensions=(), default_for_string=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    def _ts_type(node: TypeNode, empty: str = "any") -> str:
        return render_type(node, config.naming, empty=empty)

    def _normalize_case(text: str) -> str:
        return normalize_case(text, config.naming)

    def _ts_path(path: str, target: str = "pathParameter") -> str:
        return to_template_literal(path, target, config)

    env.filters["ts_type"] = _ts_type
    env.filters["normalize_case"] = _normalize_case
    env.filters["ts_path"] = _ts_path
    env.filters["pascal"] = to_pascal_case
    env.filters["identifier"] = ts_identifier
    return env


def to_template_literal(path: str, target: str, config: RenderConfig) -> str:
    """Convert a path template into a TypeScript template literal.

    ``/pets/{petId}`` with target ``pathParameter`` becomes the backtick
    literal ``/pets/${pathParameter.petId}``.  Parameter names go through the
    configured naming convention so they match the generated property keys.
    """
    out: list[str] = []
    i = 0
    while i < len(path):
        start = path.find("{", i)
        end = path.find("}", start) if start != -1 else -1
        if start == -1 or end == -1:
            out.append(_escape_literal(path[i:]))
            break
        out.append(_escape_literal(path[i:start]))
        access = property_access(target, path[start + 1:end], config.naming)
        out.append("${" + access + "}")
        i = end + 1
    return "`" + "".join(out) + "`"


def _escape_literal(text: str) -> str:
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("$", "\\$")


def render_definition(
    template: Template,
    definition: DefinitionSchema,
    known: set[str],
) -> str:
    """Render one definition file.

    A definition may refer to itself (recursive types); it is never
    imported into its own file.

    Raises:
        UnresolvedReferenceError: If the schema refers to an unknown definition.
    """
    references = _checked_references(definition.name, [definition.schema_], known)
    context = {
        "name": definition.name,
        "type_name": ts_identifier(definition.name),
        "schema": definition.schema_,
        "imports": [ts_identifier(r) for r in references if r != definition.name],
    }
    return _render(template, context, definition.name)


def render_operation(
    template: Template,
    operation: OperationSchema,
    known: set[str],
    config: RenderConfig,
) -> str:
    """Render one operation (request) file.

    Raises:
        UnresolvedReferenceError: If any parameter or response type refers to
            an unknown definition.
    """
    references = _checked_references(
        operation.name,
        [
            operation.path_parameter,
            operation.query_parameter,
            operation.body_parameter,
            operation.response,
        ],
        known,
    )
    context = {
        "name": ts_identifier(operation.name),
        "type_name": ts_identifier(to_pascal_case(operation.name)),
        "summary": operation.summary,
        "method": operation.method.value.upper(),
        "path": operation.path,
        "path_parameter": operation.path_parameter,
        "query_parameter": operation.query_parameter,
        "body_parameter": operation.body_parameter,
        "response": operation.response,
        "imports": [ts_identifier(r) for r in references],
        "definition_dir": config.definition_dir,
    }
    return _render(template, context, operation.name)


def _checked_references(
    owner: str,
    nodes: list[TypeNode | None],
    known: set[str],
) -> list[str]:
    references: list[str] = []
    for node in nodes:
        for name in collect_references(node):
            if name not in known:
                raise UnresolvedReferenceError(name, owner)
            if name not in references:
                references.append(name)
    return references


def _load_template(env: Environment, name: str, source: str | None) -> Template:
    """Return the override template compiled from *source*, or the bundled one."""
    try:
        if source is not None:
            return env.from_string(source)
        return env.get_template(name)
    except TemplateError as exc:
        raise RenderError(f"Cannot load template {name}: {exc}") from exc


def _render(template: Template, context: dict[str, Any], owner: str) -> str:
    try:
        return template.render(**context)
    except TemplateError as exc:
        raise RenderError(f"Failed to render '{owner}': {exc}") from exc
