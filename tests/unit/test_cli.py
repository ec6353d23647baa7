"""Unit tests for the tagvalid CLI."""

import json
import textwrap

import pytest
from typer.testing import CliRunner

from tagvalid import __version__
from tagvalid.cli import app

MODELS = textwrap.dedent('''
    from dataclasses import dataclass, field
    from typing import Optional

    from pydantic import BaseModel, Field

    from tagvalid import valid


    @dataclass
    class AddFile:
        file_name: str = valid("required", default="")


    @dataclass
    class Person:
        name: str = valid("required", default="")
        email: str = valid("required;email", default="")
        websites: list[str] = valid("url", default_factory=list)
        files: list[AddFile] = valid("-", default_factory=list)


    @dataclass
    class Nickname:
        nick: str = valid("required;upper", default="")


    class Server(BaseModel):
        host: str = Field(default="", json_schema_extra={"valid": "required"})
        admin: Optional[bool] = Field(default=None, json_schema_extra={"valid": "required"})
''')

PLUGIN = textwrap.dedent('''
    def upper(value):
        if not isinstance(value, str) or not value[:1].isupper():
            return ValueError("first letter should be upper case")
        return None


    def register_rules(registry):
        registry.register("upper", upper)
''')


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Importable model and plugin modules plus a clean working directory."""
    (tmp_path / "cli_models.py").write_text(MODELS, encoding="utf-8")
    (tmp_path / "cli_rules.py").write_text(PLUGIN, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestValidateCommand:
    """Test the validate command."""

    def test_valid_document(self, runner, workspace):
        data = write_json(workspace / "ok.json", {"name": "dave", "email": "a@b.com"})
        result = runner.invoke(app, ["validate", data, "--model", "cli_models:Person"])

        assert result.exit_code == 0
        assert "PASS" in result.stdout

    def test_invalid_document_json(self, runner, workspace):
        data = write_json(workspace / "bad.json", {"name": "", "email": "a@b.com", "websites": ["www"]})
        result = runner.invoke(app, ["validate", data, "-m", "cli_models:Person", "--format", "json"])

        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert report["passed"] is False
        assert [e["field"] for e in report["errors"]] == ["name", "websites"]
        assert [e["error_type"] for e in report["errors"]] == ["RequiredError", "URLFormatError"]

    def test_table_output(self, runner, workspace):
        data = write_json(workspace / "bad.json", {"email": "nope"})
        result = runner.invoke(app, ["validate", data, "-m", "cli_models:Person"])

        assert result.exit_code == 1
        assert "FAIL" in result.stdout
        assert "EmailFormatError" in result.stdout

    def test_markdown_output(self, runner, workspace):
        data = write_json(workspace / "bad.json", {"name": "dave", "email": "nope"})
        result = runner.invoke(app, ["validate", data, "-m", "cli_models:Person", "-f", "markdown"])

        assert result.exit_code == 1
        assert "# Validation Report" in result.stdout
        assert "**email**" in result.stdout

    def test_pydantic_model(self, runner, workspace):
        data = write_json(workspace / "server.json", {"host": "localhost", "admin": False})
        result = runner.invoke(app, ["validate", data, "-m", "cli_models:Server", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["total_errors"] == 0

    def test_indexed_paths(self, runner, workspace):
        data = write_json(workspace / "bad.json", {
            "name": "dave",
            "email": "a@b.com",
            "websites": ["http://ok.com", "www"],
        })
        result = runner.invoke(app, ["validate", data, "-m", "cli_models:Person", "-f", "json", "--indexed-paths"])

        assert result.exit_code == 1
        assert json.loads(result.stdout)["errors"][0]["field"] == "websites[1]"

    def test_plugin_rules(self, runner, workspace):
        data = write_json(workspace / "nick.json", {"nick": "dave"})

        without = runner.invoke(app, ["validate", data, "-m", "cli_models:Nickname", "-f", "json"])
        assert json.loads(without.stdout)["errors"][0]["error_type"] == "RuleNotFoundError"

        with_plugin = runner.invoke(app, [
            "validate", data, "-m", "cli_models:Nickname", "-f", "json", "--plugin", "cli_rules"
        ])
        report = json.loads(with_plugin.stdout)
        assert report["errors"][0]["message"] == "first letter should be upper case"

    def test_plugins_from_config(self, runner, workspace):
        (workspace / ".tagvalid.json").write_text(
            json.dumps({"plugins": ["cli_rules"], "output": {"format": "json"}}), encoding="utf-8"
        )
        data = write_json(workspace / "nick.json", {"nick": "Dave"})
        result = runner.invoke(app, ["validate", data, "-m", "cli_models:Nickname"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["passed"] is True

    def test_invalid_format(self, runner, workspace):
        data = write_json(workspace / "ok.json", {})
        result = runner.invoke(app, ["validate", data, "-m", "cli_models:Person", "-f", "xml"])

        assert result.exit_code == 1
        assert "Invalid format" in result.stdout

    def test_bad_model_path(self, runner, workspace):
        data = write_json(workspace / "ok.json", {})
        result = runner.invoke(app, ["validate", data, "-m", "cli_models"])

        assert result.exit_code == 1
        assert "Cannot load model" in result.stdout

    def test_missing_data_file(self, runner, workspace):
        result = runner.invoke(app, ["validate", "absent.json", "-m", "cli_models:Person"])

        assert result.exit_code == 1
        assert "Data file not found" in result.stdout

    def test_data_not_matching_model(self, runner, workspace):
        data = write_json(workspace / "bad.json", {"websites": "not a list"})
        result = runner.invoke(app, ["validate", data, "-m", "cli_models:Person"])

        assert result.exit_code == 1
        assert "Data does not match" in result.stdout


class TestRulesCommand:
    """Test the rules command."""

    def test_builtins_listed(self, runner, workspace):
        result = runner.invoke(app, ["rules"])

        assert result.exit_code == 0
        for name in ("required", "email", "url"):
            assert name in result.stdout

    def test_plugin_listed(self, runner, workspace):
        result = runner.invoke(app, ["rules", "--plugin", "cli_rules"])

        assert result.exit_code == 0
        assert "upper" in result.stdout
        assert "custom" in result.stdout

    def test_missing_plugin(self, runner, workspace):
        result = runner.invoke(app, ["rules", "--plugin", "no_such_module_here"])

        assert result.exit_code == 1
        assert "Failed to load plugins" in result.stdout


def test_version(runner):
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
