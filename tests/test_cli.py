"""Tests for the puppet-check CLI."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from puppetcheck import cli
from puppetcheck.checkers.base import CheckerToolError
from puppetcheck.cli import EXIT_CONTENT_ERRORS, EXIT_TOOL_ERROR, EXIT_USER_ERROR, app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run every test from an empty directory with no PUPPETCHECK_* variables."""
    for key in list(os.environ):
        if key.startswith("PUPPETCHECK_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


def test_version() -> None:
    """Test --version flag shows version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "puppet-check version" in result.stdout


def test_help() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "--style" in result.stdout


def test_clean_data_files(tmp_path: Path) -> None:
    (tmp_path / "good.yaml").write_text("key: value\n")
    (tmp_path / "good.json").write_text('{"key": "value"}\n')
    result = runner.invoke(app, ["good.yaml", "good.json"])
    assert result.exit_code == 0
    assert "The following files have no errors or warnings:" in result.stdout
    assert "-- good.yaml\n-- good.json\n" in result.stdout


def test_errors_set_exit_code(tmp_path: Path) -> None:
    (tmp_path / "bad.json").write_text("{")
    result = runner.invoke(app, ["bad.json"])
    assert result.exit_code == EXIT_CONTENT_ERRORS
    assert "The following files have errors:" in result.stdout
    assert "-- bad.json:" in result.stdout


def test_report_keeps_colours_when_piped(tmp_path: Path) -> None:
    """Test section headers carry ANSI colours even without a terminal."""
    (tmp_path / "bad.json").write_text("{")
    (tmp_path / "good.yaml").write_text("a: 1\n")
    (tmp_path / "notes.txt").write_text("")
    result = runner.invoke(app, ["bad.json", "good.yaml", "notes.txt"])
    assert "\033[31mThe following files have errors:\033[0m" in result.stdout
    assert "\033[32mThe following files have no errors or warnings:\033[0m" in result.stdout
    assert "\033[34mThe following files have unrecognized formats" in result.stdout


def test_no_files_found() -> None:
    result = runner.invoke(app, ["foo", "bar"])
    assert result.exit_code == EXIT_USER_ERROR
    assert "No files found in supplied paths foo, bar." in result.output


def test_tool_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "init.pp").write_text("class foo {}\n")

    def missing_tool(args: list[str], input_text: str | None = None) -> None:
        raise CheckerToolError(args[0], "executable not found")

    monkeypatch.setattr("puppetcheck.checkers.puppet.run_tool", missing_tool)
    result = runner.invoke(app, ["init.pp"])
    assert result.exit_code == EXIT_TOOL_ERROR
    assert "Unable to run 'puppet'" in result.output


def test_options_reach_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "a.yaml").write_text("a: 1\n")
    captured = {}
    original = cli.PuppetCheckRunner

    def capture(config):  # type: ignore[no-untyped-def]
        captured["config"] = config
        return original(config)

    monkeypatch.setattr(cli, "PuppetCheckRunner", capture)
    result = runner.invoke(
        app,
        ["--style", "--future", "--rubocop=--only Lint", "--puppet-lint=--fail-on-warnings", "a.yaml"],
    )
    assert result.exit_code == 0
    config = captured["config"]
    assert config.style_check is True
    assert config.future_parser is True
    assert config.rubocop_args == ["--only", "Lint"]
    assert config.puppetlint_args == ["--fail-on-warnings"]


def test_invalid_env_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "a.yaml").write_text("a: 1\n")
    monkeypatch.setenv("PUPPETCHECK_STYLE_CHECK", "sometimes")
    result = runner.invoke(app, ["a.yaml"])
    assert result.exit_code == EXIT_USER_ERROR
    assert "Invalid configuration" in result.output
