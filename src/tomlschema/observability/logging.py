"""Stream logging setup with plain-text or JSON-lines output."""

from __future__ import annotations

import datetime as dt
import json
import logging
import math
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, TextIO

from tomlschema.settings import LogFormat

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

_DEFAULT_LOGGER_NAME: Final[str] = "tomlschema"
_TEXT_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s"

_STANDARD_LOG_RECORD_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "taskName",
    }
)


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Configuration for the ``tomlschema`` logger hierarchy."""

    level: int | str = "WARNING"
    log_format: LogFormat = "text"
    logger_name: str = _DEFAULT_LOGGER_NAME
    stream: TextIO | None = field(default=None, compare=False)


class _JsonLineFormatter(logging.Formatter):
    """Formatter that emits canonical JSON objects per log line."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, JSONValue] = {
            "timestamp": _iso8601z_from_epoch(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = _extract_extra_fields(record)
        if extras:
            event["fields"] = _normalize_json_value(extras)

        if record.exc_info is not None:
            event["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            event["stack"] = str(record.stack_info)

        return json.dumps(event, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Attach a single stream handler to the package logger and return it.

    Calling this again replaces the previously installed handler.
    """

    cfg = config or LoggingConfig()
    level = _parse_log_level(cfg.level)

    formatter: logging.Formatter
    if cfg.log_format == "json":
        formatter = _JsonLineFormatter()
    else:
        formatter = logging.Formatter(_TEXT_FORMAT)

    handler = logging.StreamHandler(cfg.stream if cfg.stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    logger = logging.getLogger(cfg.logger_name)
    logger.setLevel(level)
    logger.propagate = False
    _remove_handlers(logger)
    logger.addHandler(handler)
    return logger


def shutdown_logging(logger_name: str = _DEFAULT_LOGGER_NAME) -> None:
    """Flush and detach handlers installed by ``setup_logging``."""

    logger = logging.getLogger(logger_name)
    _remove_handlers(logger)
    logger.propagate = True


def _remove_handlers(logger: logging.Logger) -> None:
    for existing in list(logger.handlers):
        existing.flush()
        logger.removeHandler(existing)
        existing.close()


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value

    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


def _iso8601z_from_epoch(epoch_seconds: float) -> str:
    timestamp = dt.datetime.fromtimestamp(epoch_seconds, tz=dt.UTC)
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _extract_extra_fields(record: logging.LogRecord) -> dict[str, object]:
    fields: dict[str, object] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_LOG_RECORD_FIELDS or key.startswith("_"):
            continue
        fields[key] = value
    return fields


def _normalize_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else repr(value)
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Mapping):
        return {str(key): _normalize_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_json_value(item) for item in value]
    return repr(value)


__all__ = ["JSONValue", "LoggingConfig", "setup_logging", "shutdown_logging"]
