"""
tomlschema — unit tests for observability logging

File: tests/unit/observability/test_logging.py
Last updated: 2026-10-18

Purpose
- Validate stream logging setup in plain-text and JSON-lines formats.

What this test file should cover
- JSON line validity, canonical timestamps and extra field capture.
- Handler replacement on repeated setup and clean shutdown.

Non-functional requirements
- Deterministic and non-flaky.
"""

from __future__ import annotations

import io
import json
import logging
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from tomlschema.observability.logging import LoggingConfig, setup_logging, shutdown_logging

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def logger_name() -> Iterator[str]:
    name = f"tomlschema.tests.logging.{uuid4().hex}"
    yield name
    shutdown_logging(name)


def test_text_format_writes_level_name_and_message(logger_name: str) -> None:
    stream = io.StringIO()
    logger = setup_logging(LoggingConfig(level="INFO", logger_name=logger_name, stream=stream))

    logger.info("compiled %s", "schema.toml")
    logger.debug("hidden")

    assert stream.getvalue() == f"INFO {logger_name}: compiled schema.toml\n"


def test_json_format_emits_one_object_per_line(logger_name: str) -> None:
    stream = io.StringIO()
    logger = setup_logging(
        LoggingConfig(level="DEBUG", log_format="json", logger_name=logger_name, stream=stream)
    )

    logger.warning("ignoring key %r", "regex", extra={"schema_kind": "int", "depth": 2})
    logging.getLogger(f"{logger_name}.child").debug("nested")

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert len(lines) == 2
    first, second = lines
    assert first["level"] == "WARNING"
    assert first["logger"] == logger_name
    assert first["message"] == "ignoring key 'regex'"
    assert first["fields"] == {"depth": 2, "schema_kind": "int"}
    assert first["timestamp"].endswith("Z")
    assert second["logger"] == f"{logger_name}.child"
    assert "fields" not in second


def test_json_format_records_exceptions(logger_name: str) -> None:
    stream = io.StringIO()
    logger = setup_logging(
        LoggingConfig(log_format="json", logger_name=logger_name, stream=stream)
    )

    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception("load failed")

    event = json.loads(stream.getvalue())
    assert event["level"] == "ERROR"
    assert "ValueError: boom" in event["exception"]


def test_setup_replaces_previous_handler(logger_name: str) -> None:
    first = io.StringIO()
    second = io.StringIO()
    setup_logging(LoggingConfig(logger_name=logger_name, stream=first))
    logger = setup_logging(LoggingConfig(logger_name=logger_name, stream=second))

    logger.warning("once")

    assert first.getvalue() == ""
    assert second.getvalue().count("once") == 1
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_shutdown_detaches_handlers(logger_name: str) -> None:
    logger = setup_logging(LoggingConfig(logger_name=logger_name, stream=io.StringIO()))

    shutdown_logging(logger_name)

    assert logger.handlers == []
    assert logger.propagate is True


def test_unknown_level_is_rejected(logger_name: str) -> None:
    with pytest.raises(ValueError, match="unsupported logging level"):
        setup_logging(LoggingConfig(level="LOUD", logger_name=logger_name))
