"""Unit tests for the process entrypoint and exit-code routing."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from tomlschema.loader import DocumentLoadError
from tomlschema.main import ExitCode, cli_entrypoint


def test_exit_code_contract() -> None:
    assert [int(code) for code in ExitCode] == [0, 1, 2, 4]


def test_argument_errors_map_to_schema_error_code(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_entrypoint(["check"]) == ExitCode.SCHEMA_ERROR
    assert "usage:" in capsys.readouterr().err


def test_help_exits_successfully(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_entrypoint(["--help"]) == ExitCode.SUCCESS
    assert "tomlschema check" in capsys.readouterr().out


def test_load_errors_map_to_schema_error_code(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    schema = tmp_path / "schema.toml"
    schema.write_text("name = ", encoding="utf-8")

    assert cli_entrypoint(["compile", str(schema)]) == ExitCode.SCHEMA_ERROR
    assert "invalid TOML" in capsys.readouterr().err


def test_chained_value_errors_map_to_schema_error_code(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _fail(argv: Sequence[str] | None = None) -> int:
        try:
            raise DocumentLoadError("unreadable")
        except DocumentLoadError as exc:
            raise RuntimeError("wrapped") from exc

    monkeypatch.setattr("tomlschema.ui.cli.run_cli", _fail)

    assert cli_entrypoint([]) == ExitCode.SCHEMA_ERROR
    assert capsys.readouterr().err == "error: wrapped\n"


def test_unexpected_exceptions_are_internal_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _crash(argv: Sequence[str] | None = None) -> int:
        raise RuntimeError("kaboom")

    monkeypatch.setattr("tomlschema.ui.cli.run_cli", _crash)

    assert cli_entrypoint([]) == ExitCode.INTERNAL_ERROR
    err = capsys.readouterr().err
    assert "Traceback" in err
    assert "RuntimeError: kaboom" in err


def test_plain_value_errors_are_internal_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _crash(argv: Sequence[str] | None = None) -> int:
        raise ValueError("bad arithmetic")

    monkeypatch.setattr("tomlschema.ui.cli.run_cli", _crash)

    assert cli_entrypoint([]) == ExitCode.INTERNAL_ERROR
    assert "ValueError: bad arithmetic" in capsys.readouterr().err


def test_schema_construction_errors_map_to_schema_error_code(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    schema = tmp_path / "schema.toml"
    schema.write_text('port = {type = "int", min = "low"}\n', encoding="utf-8")

    assert cli_entrypoint(["compile", str(schema)]) == ExitCode.SCHEMA_ERROR
    err = capsys.readouterr().err
    assert err.startswith("error: ")
    assert "Traceback" not in err


def test_unknown_exit_codes_are_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("tomlschema.ui.cli.run_cli", lambda argv=None: 9)

    assert cli_entrypoint([]) == ExitCode.INTERNAL_ERROR
