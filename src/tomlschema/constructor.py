"""
tomlschema — schema constructor.

File: src/tomlschema/constructor.py
Last updated: 2026-10-18

Purpose
- Compile a schema document (a TOML table) into an immutable ``SchemaNode`` tree.

What should be included in this file
- ``type`` dispatch (absent means ``table``) to one builder per node kind.
- Shape checks for every recognized option key, with field/expected/actual
  reported on failure.
- Literal entry compilation for tables, including the ``$`` escape marker.
- Extras record parsing and regex compilation.

Functional requirements
- Unknown option keys and unusable defaults are logged as warnings, never fatal.
- Nested failures are wrapped with the key or position where they occurred.
- Defaults are captured as-is; they are not validated against their schema.

Non-functional requirements
- All-or-nothing: any failure aborts the whole compile.
- Every regex is compiled exactly once, here.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Final

from tomlschema.errors import SchemaConstructionError
from tomlschema.model import (
    MATCH_ALL_PATTERN,
    AlternativeSchema,
    AnythingSchema,
    ArraySchema,
    BoolSchema,
    DateSchema,
    ExactSchema,
    FloatSchema,
    IntegerSchema,
    LiteralEntry,
    SchemaNode,
    StringSchema,
    TableEntry,
    TableSchema,
)
from tomlschema.schema_type import SchemaType
from tomlschema.values import render_value

logger = logging.getLogger(__name__)

TYPE_KEY: Final[str] = "type"
DEFAULT_KEY: Final[str] = "default"
ESCAPE_MARKER: Final[str] = "$"
_EXTRAS_RECORD_KEYS: Final[frozenset[str]] = frozenset({"key", "schema"})

_Builder = Callable[[Mapping[str, object]], SchemaNode]


def compile_schema(document: Mapping[str, object]) -> SchemaNode:
    """Compile a schema document; a default declared at the root is ignored."""

    node, default = build_node(document)
    if default is not None:
        logger.warning(
            "ignoring default %s declared at the schema root", render_value(default)
        )
    return node


def build_node(document: object) -> tuple[SchemaNode, object]:
    """Compile one schema document node.

    Returns the node and the ``default`` declared next to it (``None`` when
    absent). Only a table entry's caller can make use of the default.
    """

    table = _as_schema_table(document)
    kind = _read_kind(table)
    node = _BUILDERS[kind](table)
    return node, table.get(DEFAULT_KEY)


def unescape_entry_name(key: str) -> str:
    """Strip exactly one leading escape marker from a literal entry name."""

    if key.startswith(ESCAPE_MARKER):
        return key[len(ESCAPE_MARKER) :]
    return key


# ---------------------------------------------------------------------------
# Per-kind builders
# ---------------------------------------------------------------------------


def _build_string(table: Mapping[str, object]) -> SchemaNode:
    pattern = re.compile(MATCH_ALL_PATTERN)
    for key, value in _option_items(table):
        if key == "regex":
            if not isinstance(value, str):
                raise SchemaConstructionError.bad_shape("regex", "a string", value)
            pattern = _compile_pattern("regex", value)
        else:
            _warn_unknown_key(key, SchemaType.STRING)
    return StringSchema(pattern=pattern)


def _build_int(table: Mapping[str, object]) -> SchemaNode:
    bounds: dict[str, int] = {}
    for key, value in _option_items(table):
        if key in ("min", "max"):
            if not isinstance(value, int) or isinstance(value, bool):
                raise SchemaConstructionError.bad_shape(key, "an int", value)
            bounds[key] = value
        else:
            _warn_unknown_key(key, SchemaType.INTEGER)
    return IntegerSchema(**bounds)


def _build_float(table: Mapping[str, object]) -> SchemaNode:
    bounds: dict[str, float] = {}
    nan_ok = False
    for key, value in _option_items(table):
        if key in ("min", "max"):
            if not isinstance(value, float):
                raise SchemaConstructionError.bad_shape(key, "a float", value)
            bounds[key] = value
        elif key == "nan_ok":
            if not isinstance(value, bool):
                raise SchemaConstructionError.bad_shape(key, "a bool", value)
            nan_ok = value
        else:
            _warn_unknown_key(key, SchemaType.FLOAT)
    return FloatSchema(nan_ok=nan_ok, **bounds)


def _build_bool(table: Mapping[str, object]) -> SchemaNode:
    _warn_all_options(table, SchemaType.BOOL)
    return BoolSchema()


def _build_date(table: Mapping[str, object]) -> SchemaNode:
    _warn_all_options(table, SchemaType.DATE)
    return DateSchema()


def _build_anything(table: Mapping[str, object]) -> SchemaNode:
    _warn_all_options(table, SchemaType.ANYTHING)
    return AnythingSchema()


def _build_exact(table: Mapping[str, object]) -> SchemaNode:
    for key, _value in _option_items(table):
        if key != "value":
            _warn_unknown_key(key, SchemaType.EXACT)
    if "value" not in table:
        raise SchemaConstructionError(
            "exact schema requires a 'value' key", field="value", expected="any value"
        )
    return ExactSchema(value=table["value"])


def _build_array(table: Mapping[str, object]) -> SchemaNode:
    child: SchemaNode | None = None
    counts: dict[str, int] = {}
    for key, value in _option_items(table):
        if key == "child":
            child = _build_nested(value, "child", "in array child", ("child",))
            continue
        if key == "min":
            counts["min_count"] = _as_count(key, value)
        elif key == "max":
            counts["max_count"] = _as_count(key, value)
        else:
            _warn_unknown_key(key, SchemaType.ARRAY)
    if child is None:
        raise SchemaConstructionError(
            "array schema requires a 'child' key", field="child", expected="a schema table"
        )
    return ArraySchema(child=child, **counts)


def _build_table(table: Mapping[str, object]) -> SchemaNode:
    entries: dict[str, LiteralEntry] = {}
    extras: tuple[TableEntry, ...] = ()
    counts: dict[str, int] = {}
    for key, value in _option_items(table):
        if key == "min":
            counts["min_extra"] = _as_count(key, value)
        elif key == "max":
            counts["max_extra"] = _as_count(key, value)
        elif key == "extras":
            extras = _build_extras(value)
        else:
            name = unescape_entry_name(key)
            if name in entries:
                raise SchemaConstructionError(
                    f"duplicate table entry {name!r} (after stripping {ESCAPE_MARKER!r})",
                    field=key,
                )
            entries[name] = _build_entry(key, name, value)
    return TableSchema(entries=MappingProxyType(entries), extras=extras, **counts)


def _build_entry(raw_key: str, name: str, value: object) -> LiteralEntry:
    if not isinstance(value, Mapping):
        raise SchemaConstructionError.bad_shape(raw_key, "a schema table", value)
    try:
        schema, default = build_node(value)
    except SchemaConstructionError as exc:
        raise exc.wrap(f"at key {name!r}", raw_key) from exc
    return LiteralEntry(schema=schema, default=default)


def _build_extras(value: object) -> tuple[TableEntry, ...]:
    records = _as_array("extras", value)
    built: list[TableEntry] = []
    for index, record in enumerate(records):
        try:
            built.append(_build_extras_record(record))
        except SchemaConstructionError as exc:
            raise exc.wrap(f"in extras[{index}]", "extras", index) from exc
    return tuple(built)


def _build_extras_record(record: object) -> TableEntry:
    if not isinstance(record, Mapping):
        raise SchemaConstructionError.bad_shape("extras", "an array of tables", record)

    if "key" not in record:
        raise SchemaConstructionError(
            "extras entry requires a 'key' key", field="key", expected="a regex string"
        )
    raw_key = record["key"]
    if not isinstance(raw_key, str):
        raise SchemaConstructionError.bad_shape("key", "a regex string", raw_key)
    pattern = _compile_pattern("key", raw_key)

    if "schema" not in record:
        raise SchemaConstructionError(
            "extras entry requires a 'schema' key", field="schema", expected="a schema table"
        )
    schema = _build_nested(
        record["schema"], "schema", f"in extras schema for {raw_key!r}", ("schema",)
    )

    unused = sorted(set(record) - _EXTRAS_RECORD_KEYS)
    if unused:
        logger.warning("ignoring unrecognized keys %s in table extras entry", unused)
    return TableEntry(key=pattern, schema=schema)


def _build_alternative(table: Mapping[str, object]) -> SchemaNode:
    options: list[SchemaNode] | None = None
    for key, value in _option_items(table):
        if key == "options":
            raw_options = _as_array("options", value)
            options = [
                _build_nested(option, "options", f"in options[{index}]", ("options", index))
                for index, option in enumerate(raw_options)
            ]
        else:
            _warn_unknown_key(key, SchemaType.ALTERNATIVE)
    if options is None:
        raise SchemaConstructionError(
            "alternative schema requires an 'options' key",
            field="options",
            expected="an array of schema tables",
        )
    return AlternativeSchema(options=tuple(options))


_BUILDERS: Final[Mapping[SchemaType, _Builder]] = MappingProxyType(
    {
        SchemaType.STRING: _build_string,
        SchemaType.INTEGER: _build_int,
        SchemaType.FLOAT: _build_float,
        SchemaType.BOOL: _build_bool,
        SchemaType.DATE: _build_date,
        SchemaType.ARRAY: _build_array,
        SchemaType.TABLE: _build_table,
        SchemaType.ALTERNATIVE: _build_alternative,
        SchemaType.ANYTHING: _build_anything,
        SchemaType.EXACT: _build_exact,
    }
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _as_schema_table(document: object) -> Mapping[str, object]:
    if not isinstance(document, Mapping):
        raise SchemaConstructionError.bad_shape("schema", "a table", document)
    return document


def _read_kind(table: Mapping[str, object]) -> SchemaType:
    raw = table.get(TYPE_KEY)
    if raw is None:
        return SchemaType.TABLE
    if not isinstance(raw, str):
        raise SchemaConstructionError.bad_shape(TYPE_KEY, "a string", raw)
    return SchemaType.parse(raw)


def _option_items(table: Mapping[str, object]) -> list[tuple[str, object]]:
    return [(key, value) for key, value in table.items() if key not in (TYPE_KEY, DEFAULT_KEY)]


def _build_nested(
    value: object,
    field: str,
    description: str,
    steps: tuple[str | int, ...],
) -> SchemaNode:
    """Compile a child schema whose own default can never be honored."""

    if not isinstance(value, Mapping):
        raise SchemaConstructionError.bad_shape(field, "a schema table", value).wrap(
            description, *steps
        )
    try:
        node, default = build_node(value)
    except SchemaConstructionError as exc:
        raise exc.wrap(description, *steps) from exc
    if default is not None:
        logger.warning(
            "ignoring default %s %s: it can never be applied",
            render_value(default),
            description,
        )
    return node


def _compile_pattern(field: str, pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise SchemaConstructionError(
            f"invalid regular expression {pattern!r} for '{field}': {exc}",
            field=field,
            expected="a valid regular expression",
            actual=pattern,
        ) from exc


def _as_array(field: str, value: object) -> Sequence[object]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise SchemaConstructionError.bad_shape(field, "an array", value)
    return value


def _as_count(field: str, value: object) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise SchemaConstructionError.bad_shape(field, "a non-negative int", value)
    return value


def _warn_unknown_key(key: str, kind: SchemaType) -> None:
    logger.warning("ignoring unrecognized key %r in %s schema", key, kind.type_name)


def _warn_all_options(table: Mapping[str, object], kind: SchemaType) -> None:
    for key, _value in _option_items(table):
        _warn_unknown_key(key, kind)


__all__ = [
    "DEFAULT_KEY",
    "ESCAPE_MARKER",
    "TYPE_KEY",
    "build_node",
    "compile_schema",
    "unescape_entry_name",
]
