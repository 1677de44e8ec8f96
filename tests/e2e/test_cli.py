"""End-to-end CLI coverage for the developer commands exposed by lib-tag-merge."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

import lib_cli_exit_tools

from lib_tag_merge import cli
from lib_tag_merge.domain.errors import MalformedTag


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_parse_tag_outputs_structure() -> None:
    result = _runner().invoke(cli.cli, ["parse-tag", "EV.AISvcURL|FV.Service.URL,skipzero,later"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload == {
        "alternatives": [["EV", "AISvcURL"], ["FV", "Service", "URL"]],
        "options": ["skipzero", "later"],
        "unknown_options": ["later"],
        "canonical": "EV.AISvcURL|FV.Service.URL,skipzero,later",
    }


def test_cli_parse_tag_rejects_malformed_tag() -> None:
    result = _runner().invoke(cli.cli, ["parse-tag", "Foo..Bar"])
    assert result.exit_code != 0
    assert isinstance(result.exception, MalformedTag)


def test_cli_parse_tag_strict() -> None:
    result = _runner().invoke(cli.cli, ["parse-tag", "--strict", "A,later"])
    assert isinstance(result.exception, MalformedTag)


def test_cli_resolve_json_document(tmp_path: Path) -> None:
    source = tmp_path / "sources.json"
    source.write_text(json.dumps({"EV": {"URL": "env-url"}, "FV": {"Service": {"URL": "file-url"}}}), encoding="utf-8")
    result = _runner().invoke(cli.cli, ["resolve", "--source", str(source), "EV.URL|FV.Service.URL"])
    assert result.exit_code == 0
    assert json.loads(result.output) == "file-url"


def test_cli_resolve_toml_document_with_skipzero(tmp_path: Path) -> None:
    source = tmp_path / "sources.toml"
    source.write_text("[EV]\ncount = 3\n[FV]\ncount = 0\n", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["resolve", "--source", str(source), "EV.count|FV.count,skipzero"])
    assert result.exit_code == 0
    assert json.loads(result.output) == 3


def test_cli_resolve_yaml_sequence_index(tmp_path: Path) -> None:
    source = tmp_path / "sources.yaml"
    source.write_text("users:\n  - ann\n  - bob\n", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["resolve", "--source", str(source), "users.1"])
    assert result.exit_code == 0
    assert json.loads(result.output) == "bob"


def test_cli_resolve_missing_value_prints_null(tmp_path: Path) -> None:
    source = tmp_path / "sources.yml"
    source.write_text("EV: {}\n", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["resolve", "--source", str(source), "EV.missing"])
    assert result.exit_code == 0
    assert result.output.strip() == "null"


def test_cli_resolve_rejects_unknown_suffix(tmp_path: Path) -> None:
    source = tmp_path / "sources.ini"
    source.write_text("[EV]\n", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["resolve", "--source", str(source), "EV"])
    assert result.exit_code == 2


def test_cli_resolve_rejects_broken_document(tmp_path: Path) -> None:
    source = tmp_path / "sources.json"
    source.write_text("{broken", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["resolve", "--source", str(source), "EV"])
    assert result.exit_code == 2


def test_main_returns_non_zero_for_empty_tag() -> None:
    assert cli.main(["parse-tag", "|"]) != 0


def test_main_restores_traceback_configuration() -> None:
    lib_cli_exit_tools.config.traceback = False
    cli.main(["--traceback", "parse-tag", "EV.URL"])
    assert lib_cli_exit_tools.config.traceback is False


def test_cli_info_runs() -> None:
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert result.output.strip()
