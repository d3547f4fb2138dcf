"""Console output for swagts: data on stdout, diagnostics on stderr.

Generated TypeScript goes to disk, so stdout only ever carries what the
``inspect`` commands and ``generate --dry-run`` print (tables, IR dumps as
JSON).  Everything addressed to the person running the tool goes to stderr:
the ``Generate: <path>`` lines, the final summary, warnings, errors and log
records.  Redirecting stdout therefore captures clean data.

Formatting follows the terminal:

* stdout attached to a TTY (and colour allowed) -> Rich tables and
  highlighted JSON;
* otherwise -> tab-separated rows and plain JSON;
* ``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` turn colour off.

:class:`OutputManager` holds those choices.  The CLI callback builds one per
invocation and installs it with :func:`set_output`; the module-level
functions (:func:`info`, :func:`error`, ...) forward to it so library code
never has to pass it around.  :func:`install_log_handler` sends records from
the ``swagts`` logger tree to the same stderr console.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How stdout data is formatted.

    ``AUTO`` becomes ``RICH`` on a colour-capable TTY and ``PLAIN`` anywhere
    else; ``--json`` and ``--plain`` pick a format explicitly.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Route swagts output to stdout or stderr in the active format.

    Args:
        format: Requested stdout format; ``AUTO`` is resolved at construction.
        no_color: Print diagnostics without colour or markup.
        quiet: Drop informational diagnostics (file reports, summary).
            Errors and WARNING log records are always shown.
        verbose: Show debug diagnostics and DEBUG log records.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        """Console bound to stderr; shared with the log handler."""
        return self._stderr

    # --- stdout ---

    def print_data(self, text: str) -> None:
        """Write *text* to stdout unchanged."""
        print(text, file=sys.stdout, flush=True)

    def print_json(self, data: Any) -> None:
        """Dump *data* as indented JSON; highlighted when the format is RICH."""
        dumped = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(dumped, "json", theme="monokai", word_wrap=True))
        else:
            self.print_data(dumped)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print *rows* under *headers*.

        JSON format emits a list of objects keyed by header, PLAIN emits
        tab-separated lines (header first), RICH draws a table with *title*.
        """
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return

        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # --- stderr ---

    def info(self, message: str) -> None:
        """Report progress, e.g. ``Generate: <path>``."""
        if self._quiet:
            return
        if self._no_color:
            self._plain(message)
        else:
            self._stderr.print(message, markup=False, highlight=False)

    def success(self, message: str) -> None:
        self._diagnostic(message, "", "green", suppressible=True)

    def error(self, message: str) -> None:
        self._diagnostic(message, "Error: ", "bold red")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic(message, "[debug] ", "dim")

    def _diagnostic(
        self, message: str, prefix: str, style: str, suppressible: bool = False
    ) -> None:
        if suppressible and self._quiet:
            return
        if self._no_color:
            self._plain(prefix + message)
        else:
            self._stderr.print(prefix + message, style=style, markup=False, highlight=False)

    @staticmethod
    def _plain(text: str) -> None:
        print(text, file=sys.stderr, flush=True)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (to anything) or ``TERM`` is ``dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# --- global instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests rebind sys.stdout/sys.stderr)."""
    global _output
    _output = None


def install_log_handler(output: OutputManager) -> None:
    """Send ``swagts`` log records to *output*'s stderr console.

    The level is DEBUG for a verbose manager and WARNING otherwise. A
    handler left by an earlier call is replaced, never stacked.
    """
    logger = logging.getLogger("swagts")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    logger.addHandler(
        RichHandler(
            console=output.stderr_console,
            show_time=False,
            show_path=False,
            markup=False,
        )
    )
    logger.setLevel(logging.DEBUG if output.is_verbose else logging.WARNING)


# --- forwarding helpers ---


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def debug(message: str) -> None:
    get_output().debug(message)
