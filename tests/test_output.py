"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- print_table and print_json in each format
- Log records routed to the stderr console
- Global instance management
"""

from __future__ import annotations

import json
import logging

import pytest
from rich.logging import RichHandler

from swagts import output as output_module
from swagts.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    install_log_handler,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("swagts.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("swagts.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# Format resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_no_color(self, tty):
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# Stream discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        OutputManager(no_color=True).print_data("payload")
        captured = capfd.readouterr()
        assert captured.out == "payload\n"
        assert captured.err == ""

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("info", "hello\n"),
            ("success", "hello\n"),
            ("error", "Error: hello\n"),
        ],
    )
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method, expected):
        getattr(OutputManager(no_color=True), method)("hello")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == expected


class TestQuietAndVerbose:
    @pytest.mark.parametrize("method", ["info", "success"])
    def test_quiet_suppresses(self, capfd, non_tty, method):
        getattr(OutputManager(no_color=True, quiet=True), method)("hidden")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors(self, capfd, non_tty):
        OutputManager(no_color=True, quiet=True).error("shown")
        assert "shown" in capfd.readouterr().err

    def test_debug_hidden_by_default(self, capfd, non_tty):
        OutputManager(no_color=True).debug("details")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        manager = OutputManager(no_color=True, verbose=True)
        manager.debug("details")
        assert capfd.readouterr().err == "[debug] details\n"
        assert manager.is_verbose is True


# ------------------------------------------------------------------ #
# Tables and JSON
# ------------------------------------------------------------------ #


class TestDataFormats:
    def test_plain_table_is_tab_separated(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_table(
            ["File", "Bytes"], [["a.ts", "10"], ["b.ts", "20"]]
        )
        assert capfd.readouterr().out == "File\tBytes\na.ts\t10\nb.ts\t20\n"

    def test_json_table_is_records(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_table(["Name"], [["Pet"]])
        assert json.loads(capfd.readouterr().out) == [{"Name": "Pet"}]

    def test_rich_table_contains_cells(self, capfd, tty):
        OutputManager(format=OutputFormat.RICH).print_table(["Name"], [["Pet"]], title="Defs")
        out = capfd.readouterr().out
        assert "Name" in out
        assert "Pet" in out

    def test_print_json_plain(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_json({"kind": "object"})
        assert json.loads(capfd.readouterr().out) == {"kind": "object"}


# ------------------------------------------------------------------ #
# Logging
# ------------------------------------------------------------------ #


class TestLogHandler:
    def test_warning_level_by_default(self, non_tty):
        install_log_handler(OutputManager(no_color=True))
        logger = logging.getLogger("swagts")
        assert logger.level == logging.WARNING
        assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1

    def test_debug_level_when_verbose(self, non_tty):
        install_log_handler(OutputManager(no_color=True, verbose=True))
        assert logging.getLogger("swagts").level == logging.DEBUG

    def test_repeated_install_replaces_handler(self, non_tty):
        install_log_handler(OutputManager(no_color=True))
        install_log_handler(OutputManager(no_color=True))
        handlers = logging.getLogger("swagts").handlers
        assert sum(isinstance(h, RichHandler) for h in handlers) == 1

    def test_records_reach_stderr(self, capfd, non_tty):
        install_log_handler(OutputManager(no_color=True))
        logging.getLogger("swagts.parser.extractor").warning("Skip deprecated operation x")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "Skip deprecated operation x" in captured.err


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self, non_tty):
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_output_installs_instance(self, non_tty):
        manager = OutputManager(quiet=True)
        set_output(manager)
        assert get_output() is manager

    def test_convenience_functions_use_global(self, capfd, non_tty):
        set_output(OutputManager(no_color=True))
        output_module.info("via module")
        output_module.error("failed")
        captured = capfd.readouterr()
        assert captured.err == "via module\nError: failed\n"
        assert captured.out == ""
