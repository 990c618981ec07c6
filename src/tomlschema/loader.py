"""
tomlschema — document loader.

File: src/tomlschema/loader.py
Last updated: 2026-10-18

Purpose
- Read schema and candidate documents from disk into the TOML value model.

What should be included in this file
- TOML loading via ``tomllib``; YAML (``yaml.safe_load``) and JSON for
  candidate documents authored in other formats.
- Rejection of values the TOML model cannot represent (``null``, YAML
  ``!!binary`` and ``!!set``, non-string keys).
- ``load_schema`` convenience wrapper around ``compile_schema``.

Functional requirements
- Fail with ``DocumentLoadError`` naming the file and the reason.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Literal, cast

import yaml

from tomlschema.constructor import compile_schema
from tomlschema.errors import PathStep, format_path
from tomlschema.model import SchemaNode
from tomlschema.values import value_kind

logger = logging.getLogger(__name__)

DocumentFormat = Literal["toml", "yaml", "json"]

_SUFFIX_FORMATS: Final[dict[str, DocumentFormat]] = {
    ".toml": "toml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
}


class DocumentLoadError(ValueError):
    """Raised when a document cannot be read, parsed or represented."""


def detect_format(path: Path) -> DocumentFormat:
    """Infer the document format from the file suffix (TOML when unknown)."""

    return _SUFFIX_FORMATS.get(path.suffix.lower(), "toml")


def load_document(
    path: str | Path,
    *,
    document_format: DocumentFormat | None = None,
) -> dict[str, Any]:
    """Load a document whose root is a table."""

    resolved = Path(path)
    selected = document_format or detect_format(resolved)
    try:
        text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(f"unable to read {resolved}: {exc}") from exc
    logger.debug("loading %s document %s", selected, resolved)
    return loads_document(text, document_format=selected, source=str(resolved))


def loads_document(
    text: str,
    *,
    document_format: DocumentFormat = "toml",
    source: str = "<string>",
) -> dict[str, Any]:
    """Parse document text whose root is a table."""

    parsed: object
    if document_format == "toml":
        try:
            parsed = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise DocumentLoadError(f"invalid TOML in {source}: {exc}") from exc
    elif document_format == "yaml":
        try:
            parsed = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"invalid YAML in {source}: {exc}") from exc
    elif document_format == "json":
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DocumentLoadError(f"invalid JSON in {source}: {exc}") from exc
    else:
        raise DocumentLoadError(f"unsupported document format {document_format!r}")

    if not isinstance(parsed, Mapping):
        raise DocumentLoadError(f"document root must be a table: {source}")
    _reject_unrepresentable(parsed, (), source)
    return dict(parsed)


def load_schema(path: str | Path) -> SchemaNode:
    """Load and compile a schema document."""

    return compile_schema(load_document(path))


def _reject_unrepresentable(value: object, path: tuple[PathStep, ...], source: str) -> None:
    """Raise ``DocumentLoadError`` at the first value outside the TOML model."""

    if value is None:
        raise DocumentLoadError(
            f"null at {format_path(path)} in {source} has no TOML representation"
        )
    try:
        kind = value_kind(value)
    except TypeError as exc:
        raise DocumentLoadError(
            f"{type(value).__name__} at {format_path(path)} in {source} "
            "has no TOML representation"
        ) from exc
    if kind == "table":
        for key, item in cast(Mapping[object, object], value).items():
            if not isinstance(key, str):
                raise DocumentLoadError(
                    f"non-string key {key!r} at {format_path(path)} in {source}"
                )
            _reject_unrepresentable(item, (*path, key), source)
    elif kind == "array":
        for index, item in enumerate(cast(Sequence[object], value)):
            _reject_unrepresentable(item, (*path, index), source)


__all__ = [
    "DocumentFormat",
    "DocumentLoadError",
    "detect_format",
    "load_document",
    "load_schema",
    "loads_document",
]
