"""
tomlschema — runtime settings.

File: src/tomlschema/settings.py
Last updated: 2026-10-18

Purpose
- Resolve command-line runtime settings with deterministic precedence:
  CLI flag > ``TOMLSCHEMA_`` environment variable > built-in default.

Functional requirements
- Reject unknown log levels/formats and malformed booleans with ``SettingsError``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, Literal

ENV_PREFIX: Final[str] = "TOMLSCHEMA_"
LOG_FORMATS: Final[tuple[str, ...]] = ("text", "json")

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})
_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LogFormat = Literal["text", "json"]


class SettingsError(ValueError):
    """Raised when a CLI flag or environment override cannot be coerced."""


@dataclass(frozen=True, slots=True)
class Settings:
    log_level: str = "WARNING"
    log_format: LogFormat = "text"
    no_color: bool = False

    @property
    def log_level_number(self) -> int:
        return int(getattr(logging, self.log_level))


def resolve_settings(
    *,
    log_level: str | None = None,
    log_format: str | None = None,
    no_color: bool | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Merge CLI values over ``TOMLSCHEMA_*`` environment values over defaults."""

    env = os.environ if environ is None else environ
    defaults = Settings()

    raw_level = log_level if log_level is not None else env.get(f"{ENV_PREFIX}LOG_LEVEL")
    raw_format = log_format if log_format is not None else env.get(f"{ENV_PREFIX}LOG_FORMAT")
    if no_color is None:
        raw_no_color = env.get(f"{ENV_PREFIX}NO_COLOR")
        no_color = (
            _coerce_bool(raw_no_color, f"{ENV_PREFIX}NO_COLOR")
            if raw_no_color is not None
            else defaults.no_color
        )

    return Settings(
        log_level=_parse_level(raw_level) if raw_level is not None else defaults.log_level,
        log_format=_parse_format(raw_format) if raw_format is not None else defaults.log_format,
        no_color=no_color,
    )


def _parse_level(raw: str) -> str:
    normalized = raw.strip().upper()
    if normalized not in _LOG_LEVELS:
        raise SettingsError(
            f"unsupported log level {raw!r} (expected one of: {', '.join(_LOG_LEVELS)})"
        )
    return normalized


def _parse_format(raw: str) -> LogFormat:
    normalized = raw.strip().lower()
    if normalized == "text":
        return "text"
    if normalized == "json":
        return "json"
    raise SettingsError(f"unsupported log format {raw!r} (expected text or json)")


def _coerce_bool(raw: str, name: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise SettingsError(f"{name} must be a boolean (true/false/1/0/yes/no/on/off)")


__all__ = ["ENV_PREFIX", "LOG_FORMATS", "LogFormat", "Settings", "SettingsError", "resolve_settings"]
