"""Executable CLI entrypoint for ``tomlschema``."""

from __future__ import annotations

import sys
import traceback
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


class ExitCode(IntEnum):
    """Deterministic process exit-code contract."""

    SUCCESS = 0
    VALIDATION_FAILED = 1
    SCHEMA_ERROR = 2
    INTERNAL_ERROR = 4


def cli_entrypoint(argv: Sequence[str] | None = None) -> int:
    """Entrypoint used by ``python -m tomlschema`` and the console script.

    Schema, document and settings failures anywhere in an exception chain exit
    with ``SCHEMA_ERROR`` and a one-line message; anything else is an internal
    error and prints its traceback.
    """

    try:
        from tomlschema.ui.cli import run_cli

        return int(_as_exit_code(run_cli(argv)))
    except SystemExit as exc:
        return int(_as_exit_code(exc.code))
    except BaseException as exc:  # noqa: BLE001 - CLI boundary normalization.
        if _is_user_error(exc):
            _write_stderr(f"error: {str(exc).strip() or type(exc).__name__}")
            return int(ExitCode.SCHEMA_ERROR)
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        return int(ExitCode.INTERNAL_ERROR)


def _as_exit_code(raw: object) -> ExitCode:
    if raw is None:
        return ExitCode.SUCCESS
    if isinstance(raw, str):
        if raw.strip():
            _write_stderr(raw.strip())
        return ExitCode.INTERNAL_ERROR
    try:
        return ExitCode(raw)
    except ValueError:
        return ExitCode.INTERNAL_ERROR


def _is_user_error(exc: BaseException) -> bool:
    from tomlschema.errors import SchemaConstructionError
    from tomlschema.loader import DocumentLoadError
    from tomlschema.settings import SettingsError

    user_errors = (SchemaConstructionError, DocumentLoadError, SettingsError)
    return any(isinstance(item, user_errors) for item in _exception_chain(exc))


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield ``exc`` and its causes (or unsuppressed contexts), each once."""

    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def _write_stderr(message: str) -> None:
    sys.stderr.write(message.rstrip("\n") + "\n")


__all__ = ["ExitCode", "cli_entrypoint"]
