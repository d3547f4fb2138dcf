"""Generate command -- translate a Swagger 2.0 document into TypeScript files.

Runs the full pipeline: resolve options, load the document, extract the IR,
render it, and write the files.  With ``--dry-run`` the rendered file list is
printed instead of written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from swagts.exceptions import SwagtsError
from swagts.models import NamingConvention
from swagts.output import debug, error, get_output, success


def generate_command(
    spec: str = typer.Argument(
        ..., help="Swagger 2.0 document: file path, URL, or '-' for stdin."
    ),
    dist: Optional[str] = typer.Option(
        None, "--dist", "-d", help="Output root directory. [default: .]"
    ),
    definition_dir: Optional[str] = typer.Option(
        None, "--definition-dir", help="Sub-directory for models. [default: models]"
    ),
    operation_dir: Optional[str] = typer.Option(
        None, "--operation-dir", help="Sub-directory for requests. [default: requests]"
    ),
    naming: Optional[NamingConvention] = typer.Option(
        None,
        "--naming",
        case_sensitive=False,
        help="Property name casing: preserve, camel, snake. [default: preserve]",
    ),
    definition_template: Optional[str] = typer.Option(
        None, "--definition-template", help="Custom Jinja2 template for definitions."
    ),
    operation_template: Optional[str] = typer.Option(
        None, "--operation-template", help="Custom Jinja2 template for operations."
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Project config file. [default: ./swagts.json]"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="List the files without writing them."
    ),
) -> None:
    """Generate TypeScript models and request functions from a Swagger 2.0 spec.

    Example::

        swagts generate petstore.yaml --dist src/api --naming camel
    """
    from swagts.config import build_render_config, resolve_options
    from swagts.generator import render_files, write_files
    from swagts.parser import extract_spec, load_spec

    try:
        options = resolve_options(
            {
                "dist": dist,
                "definition_dir": definition_dir,
                "operation_dir": operation_dir,
                "naming": naming,
                "definition_template": definition_template,
                "operation_template": operation_template,
            },
            config_path=config,
        )
        render_config = build_render_config(options)
        debug(f"Options: {options.model_dump(mode='json')}")

        parsed = extract_spec(load_spec(spec))
        debug(
            f"Extracted {len(parsed.definitions)} definitions, "
            f"{len(parsed.operations)} operations"
        )
        files = render_files(parsed, render_config, options.dist)

        if dry_run:
            get_output().print_table(
                ["File", "Bytes"],
                [[str(f.path), str(len(f.content.encode("utf-8")))] for f in files],
                title=f"{parsed.info.title} -- {len(files)} files (dry run)",
            )
            return

        write_files(files)
    except SwagtsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(
        f"Generated {len(files)} files "
        f"({len(parsed.definitions)} definitions, {len(parsed.operations)} operations)"
    )
