"""The ``swagts`` command line.

Two commands hang off the root Typer app:

* ``swagts generate SPEC`` -- :func:`~swagts.commands.generate.generate_command`
* ``swagts inspect operations|definitions SPEC`` --
  :data:`~swagts.commands.inspect.inspect_app`

Output flags (``--json``, ``--plain``, ``--no-color``, ``--quiet``,
``--verbose``) belong to the root callback, so they go before the command
name: ``swagts --quiet generate petstore.yaml``.

:func:`main` is the console-script entry point. Errors from the pipeline are
handled inside the commands; anything that still escapes is written to a
crash log under :func:`~swagts.config.get_data_dir`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from swagts import __version__
from swagts.commands.generate import generate_command
from swagts.commands.inspect import inspect_app
from swagts.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED
from swagts.output import OutputFormat


app = typer.Typer(
    name="swagts",
    help="Generate TypeScript models and requests from Swagger 2.0 specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.add_typer(inspect_app, name="inspect", help="Inspect the extracted types and operations.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"swagts {__version__}")
        raise typer.Exit()


def _requested_format(json_output: bool, plain_output: bool) -> OutputFormat:
    if json_output:
        return OutputFormat.JSON
    if plain_output:
        return OutputFormat.PLAIN
    return OutputFormat.AUTO


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print data as JSON."),
    plain_output: bool = typer.Option(
        False, "--plain", help="Print data as tab-separated text."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only report warnings and errors."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug messages and log records."
    ),
) -> None:
    """Set up output for the command that follows.

    Installs a fresh :class:`~swagts.output.OutputManager` built from the
    flags and points the ``swagts`` logger at its stderr console.
    """
    from swagts.output import OutputManager, install_log_handler, set_output

    output = OutputManager(
        format=_requested_format(json_output, plain_output),
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)
    install_log_handler(output)


def _cancel(*_: Any) -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _setup_signal_handlers() -> None:
    signal.signal(signal.SIGINT, _cancel)


def _write_crash_log() -> str:
    """Save the traceback being handled to ``<data dir>/logs`` and return its path."""
    from swagts.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text(traceback.format_exc(), encoding="utf-8")
    return str(log_path)


def main() -> None:
    """Run the CLI.

    A :class:`~swagts.exceptions.SwagtsError` that reaches this level exits
    with its own code; any other exception leaves a crash log and exits with
    :data:`~swagts.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    from swagts.exceptions import SwagtsError
    from swagts.output import error

    _setup_signal_handlers()
    try:
        app()
    except KeyboardInterrupt:
        _cancel()
    except SwagtsError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        error(f"Unexpected error. Debug log: {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
