"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from propexpr import __version__
from propexpr._version import get_version
from propexpr.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_ambient_manifest(isolated_cwd: Path):
    """Keep a developer's propexpr.toml or environment out of CLI tests."""
    return isolated_cwd


def test_eval_arithmetic(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "3 + 3 * 2"])
    assert result.exit_code == 0
    assert result.output.strip() == "9"


def test_eval_undefined_is_not_an_error(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "1 / 0"])
    assert result.exit_code == 0
    assert result.output.strip() == "Undefined"


def test_eval_parse_error(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "(2*(3-3)"])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_eval_with_assignments(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "FOO * BAR", "--set", "FOO=3", "--set", "BAR=FOO + 1"])
    assert result.exit_code == 0
    assert result.output.strip() == "12"


def test_eval_bad_assignment(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "FOO", "--set", "no equals sign"])
    assert result.exit_code == 1
    assert "NAME=EXPR" in result.output


def test_eval_assignment_parse_error(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "FOO", "--set", "FOO=(1"])
    assert result.exit_code == 1
    assert "--set FOO" in result.output


def test_eval_json(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "--json", "1, 'FOO', 2.5"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload == {
        "kind": "list",
        "value": [1, "FOO", 2.5],
        "display": "[1, FOO, 2.5]",
        "error": None,
    }


def test_eval_json_parse_error(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "--json", "1 +"])
    assert result.exit_code == 1
    payload = json.loads(result.output)
    assert payload["kind"] == "absent"
    assert payload["error"]


def test_eval_with_manifest(cli_runner: CliRunner, manifest_file: Path):
    result = cli_runner.invoke(app, ["eval", "FOO + 1", "--manifest", str(manifest_file)])
    assert result.exit_code == 0
    assert result.output.strip() == "3"


def test_eval_manifest_placeholder(cli_runner: CliRunner, manifest_file: Path):
    result = cli_runner.invoke(app, ["eval", "FUNCTION FOO", "-m", str(manifest_file)])
    assert result.exit_code == 0
    assert result.output.strip() == "CALL"


def test_eval_manifest_from_environment(
    cli_runner: CliRunner, manifest_file: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv("PROPEXPR_MANIFEST", str(manifest_file))
    result = cli_runner.invoke(app, ["eval", "title"])
    assert result.exit_code == 0
    assert result.output.strip() == "Scene"


def test_eval_missing_manifest(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["eval", "1", "--manifest", str(tmp_path / "nope.toml")])
    assert result.exit_code == 1
    assert "cannot read" in result.output


def test_tokens(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["tokens", "2**FOO"])
    assert result.exit_code == 0
    assert "POWER" in result.output
    assert "IDENT" in result.output
    assert "FOO" in result.output


def test_tokens_error(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["tokens", "'open"])
    assert result.exit_code == 1
    assert "Unterminated" in result.output


def test_symbols(cli_runner: CliRunner, manifest_file: Path):
    result = cli_runner.invoke(app, ["symbols", "--manifest", str(manifest_file)])
    assert result.exit_code == 0
    for name in ("FOO", "ratio", "title", "visible", "origin"):
        assert name in result.output
    assert "[0, 10]" in result.output


def test_symbols_none(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["symbols"])
    assert result.exit_code == 0
    assert "No symbols defined." in result.output


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"propexpr version {get_version()}" in result.output


def test_get_version_matches_project() -> None:
    assert get_version() != "0.0.0"
    assert get_version() == __version__
