"""Tests for specflat.output: format resolution, stream discipline, logging."""

from __future__ import annotations

import json
import logging

import pytest

from specflat import output as output_module
from specflat.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    configure_logging,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("specflat.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("specflat.output._is_tty", lambda: True)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("TERM", raising=False)


@pytest.fixture()
def make(non_tty):
    """Build a colourless manager; plain format unless told otherwise."""

    def factory(fmt=OutputFormat.PLAIN, **kwargs):
        return OutputManager(format=fmt, no_color=True, **kwargs)

    return factory


@pytest.fixture()
def specflat_logger():
    """Restore the package logger after a test reconfigures it."""
    logger = logging.getLogger("specflat")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:], level, logger.propagate = saved
    logger.setLevel(level)


# --- format resolution ---


class TestFormatResolution:
    def test_auto_without_tty_is_plain(self, non_tty):
        assert OutputManager().format is OutputFormat.PLAIN

    def test_auto_on_tty_is_rich(self, tty):
        assert OutputManager().format is OutputFormat.RICH

    def test_auto_on_tty_without_colour_is_plain(self, tty):
        assert OutputManager(no_color=True).format is OutputFormat.PLAIN

    def test_explicit_format_kept(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format is OutputFormat.JSON

    @pytest.mark.parametrize(
        ("env", "disabled"),
        [
            ({"NO_COLOR": ""}, True),
            ({"TERM": "dumb"}, True),
            ({"TERM": "xterm-256color"}, False),
            ({}, False),
        ],
    )
    def test_colour_environment(self, monkeypatch, env, disabled):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        assert _should_disable_color() is disabled


# --- streams ---


class TestStreams:
    def test_data_on_stdout_only(self, capfd, make):
        make().print_data("hello")
        out, err = capfd.readouterr()
        assert (out, err) == ("hello\n", "")

    @pytest.mark.parametrize("level", ["info", "success", "warning", "error"])
    def test_diagnostics_on_stderr_only(self, capfd, make, level):
        getattr(make(), level)("diagnostic text")
        out, err = capfd.readouterr()
        assert out == ""
        assert "diagnostic text" in err

    def test_plain_prefixes(self, capfd, make):
        mgr = make(verbose=True)
        mgr.error("broken")
        mgr.warning("careful")
        mgr.debug("detail")
        assert capfd.readouterr().err == "Error: broken\nWarning: careful\n[debug] detail\n"

    def test_quiet_keeps_only_problems(self, capfd, make):
        mgr = make(quiet=True)
        for level in ("info", "success", "warning", "error"):
            getattr(mgr, level)(level)
        assert capfd.readouterr().err == "Warning: warning\nError: error\n"

    def test_debug_needs_verbose(self, capfd, make):
        make().debug("hidden")
        assert capfd.readouterr().err == ""

    def test_rich_diagnostics_keep_brackets(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).warning("route /pets/[id]")
        assert "route /pets/[id]" in capfd.readouterr().err


# --- structured data ---


class TestFormatResponse:
    def test_json(self, capfd, make):
        make(OutputFormat.JSON).format_response({"basepath": "/v1", "models": {}})
        assert json.loads(capfd.readouterr().out) == {"basepath": "/v1", "models": {}}

    def test_plain_mapping(self, capfd, make):
        make().format_response({"basepath": "/v1", "refs": {"Pet": None}})
        assert capfd.readouterr().out.splitlines() == ["basepath\t/v1", 'refs\t{"Pet": null}']

    def test_plain_list(self, capfd, make):
        make().format_response(["a", "b"])
        assert capfd.readouterr().out == "a\nb\n"

    def test_output_file_replaces_stdout(self, tmp_path, capfd, make):
        target = tmp_path / "out.json"
        target.write_text("stale")
        make(output_file=str(target)).format_response({"models": {"Pet": {"required": ["id"]}}})

        assert capfd.readouterr().out == ""
        assert json.loads(target.read_text()) == {"models": {"Pet": {"required": ["id"]}}}


class TestPrintTable:
    def test_json_records(self, capfd, make):
        make(OutputFormat.JSON).print_table(["Model", "Required"], [["Pet", "id, name"]])
        assert json.loads(capfd.readouterr().out) == [{"Model": "Pet", "Required": "id, name"}]

    def test_tab_separated(self, capfd, make):
        make().print_table(["Model", "Required"], [["Pet", "id"], ["Error", "code"]])
        assert capfd.readouterr().out == "Model\tRequired\nPet\tid\nError\tcode\n"

    def test_rich_table(self, capfd, make):
        make(OutputFormat.RICH).print_table(
            ["Model name", "Required properties"],
            [["PetWithOwner", "id, name, owner"]],
            title="Models (1)",
        )
        out = capfd.readouterr().out
        assert "Models (1)" in out
        assert "PetWithOwner" in out
        assert "Required properties" in out


# --- logging ---


class TestConfigureLogging:
    def test_levels(self, specflat_logger):
        configure_logging(True)
        assert specflat_logger.level == logging.DEBUG
        configure_logging(False)
        assert specflat_logger.level == logging.WARNING
        assert specflat_logger.propagate is False

    def test_single_handler_after_reconfigure(self, specflat_logger):
        configure_logging(True)
        configure_logging(True)
        assert len(specflat_logger.handlers) == 1

    def test_shares_the_stderr_console(self, specflat_logger, make):
        mgr = make()
        configure_logging(True, mgr.stderr_console)
        assert specflat_logger.handlers[0].console is mgr.stderr_console

    def test_library_debug_records_reach_stderr(self, specflat_logger, capfd, make):
        configure_logging(True, make().stderr_console)
        logging.getLogger("specflat.parser.resolver").debug("found ref %r", "Owner")
        assert "found ref 'Owner'" in capfd.readouterr().err


# --- global instance ---


class TestGlobalInstance:
    def test_default_created_lazily(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_and_reset(self, make):
        mgr = make()
        set_output(mgr)
        assert get_output() is mgr
        reset_output()
        assert output_module._output is None

    def test_shortcuts_use_installed_manager(self, capfd, make):
        set_output(make(OutputFormat.JSON))
        output_module.format_response({"a": 1})
        output_module.error("bad")
        out, err = capfd.readouterr()
        assert json.loads(out) == {"a": 1}
        assert err == "Error: bad\n"
