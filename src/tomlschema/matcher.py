"""
tomlschema — matching engine.

File: src/tomlschema/matcher.py
Last updated: 2026-10-18

Purpose
- Match a compiled ``SchemaNode`` tree against TOML values and report
  position-aware, structured ``SchemaError`` traces.
- Optionally complete tables in place with the defaults declared by the schema.

Functional requirements
- Kind mismatches report ``TypeMismatch``; ``anything`` and ``alternative`` are
  tried against every kind.
- Array counts are checked before any element; the first bad element wins.
- Literal table entries take precedence over extras and never count as extras.
- Completion only inserts absent literal keys; present values are never touched.
- A rejected alternative option or extras candidate leaves no insertions behind.

Non-functional requirements
- Pure recursive descent: no state survives a call besides the mutated value.
- Every node is matched at most once per candidate, with or without completion.
"""

from __future__ import annotations

import copy
import math
from collections.abc import Callable, Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, cast

from tomlschema.errors import (
    AlternativeMiss,
    ArrayCount,
    ArrayMiss,
    AtKey,
    ExactMiss,
    FloatMiss,
    IntMiss,
    MissingKey,
    RegexMiss,
    SchemaError,
    TableCount,
    TableMiss,
    TypeMismatch,
)
from tomlschema.model import (
    AlternativeSchema,
    ArraySchema,
    ExactSchema,
    FloatSchema,
    IntegerSchema,
    SchemaNode,
    StringSchema,
    TableEntry,
    TableSchema,
)
from tomlschema.schema_type import SchemaType
from tomlschema.values import values_equal

_Matcher = Callable[[SchemaNode, object, "_Journal | None"], "SchemaError | None"]


@dataclass(slots=True)
class _Journal:
    """Defaults inserted during one completion call, oldest first."""

    entries: list[tuple[MutableMapping[str, object], str]] = field(default_factory=list)

    def insert(self, table: MutableMapping[str, object], key: str, value: object) -> None:
        table[key] = value
        self.entries.append((table, key))

    def mark(self) -> int:
        return len(self.entries)

    def rollback(self, mark: int) -> None:
        """Remove every insertion made after ``mark``, newest first."""

        while len(self.entries) > mark:
            table, key = self.entries.pop()
            del table[key]


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of a non-raising validation call."""

    error: SchemaError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def check(schema: SchemaNode, value: object) -> None:
    """Raise the ``SchemaError`` describing why ``value`` does not match ``schema``.

    ``value`` is never modified.
    """

    error = _match(schema, value, None)
    if error is not None:
        raise error


def check_and_complete(schema: SchemaNode, value: object) -> None:
    """Insert declared defaults for absent table entries, then check.

    Only missing literal keys are added; the insertions made before a failure
    is detected are kept.
    """

    error = _match(schema, value, _Journal())
    if error is not None:
        raise error


def validate(schema: SchemaNode, value: object, *, complete: bool = False) -> MatchResult:
    """Non-raising counterpart of ``check`` / ``check_and_complete``."""

    return MatchResult(error=_match(schema, value, _Journal() if complete else None))


def is_valid(schema: SchemaNode, value: object) -> bool:
    return _match(schema, value, None) is None


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _match(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    return _MATCHERS[node.kind](node, value, journal)


def _mismatch(node: SchemaNode, value: object) -> TypeMismatch:
    return TypeMismatch(expected=node.kind, got=SchemaType.of_value(value), value=value)


def _same_kind(node: SchemaNode, value: object) -> bool:
    return SchemaType.of_value(value) is node.kind


def _match_string(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    if not _same_kind(node, value):
        return _mismatch(node, value)
    pattern = cast(StringSchema, node).pattern
    text = cast(str, value)
    if pattern.search(text) is None:
        return RegexMiss(string=text, pattern=pattern.pattern)
    return None


def _match_int(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    if not _same_kind(node, value):
        return _mismatch(node, value)
    bounds = cast(IntegerSchema, node)
    number = cast(int, value)
    if bounds.min <= number <= bounds.max:
        return None
    return IntMiss(value=number, min=bounds.min, max=bounds.max)


def _match_float(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    if not _same_kind(node, value):
        return _mismatch(node, value)
    bounds = cast(FloatSchema, node)
    number = cast(float, value)
    if math.isnan(number):
        accepted = bounds.nan_ok
    else:
        accepted = bounds.min <= number <= bounds.max
    if accepted:
        return None
    return FloatMiss(value=number, min=bounds.min, max=bounds.max, nan_ok=bounds.nan_ok)


def _match_kind_only(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    if not _same_kind(node, value):
        return _mismatch(node, value)
    return None


def _match_anything(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    return None


def _match_exact(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    expected = cast(ExactSchema, node).value
    if values_equal(expected, value):
        return None
    return ExactMiss(expected=expected, value=value)


def _match_array(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    if not _same_kind(node, value):
        return _mismatch(node, value)
    schema = cast(ArraySchema, node)
    items = cast(Sequence[object], value)

    count = len(items)
    if count < schema.min_count or (schema.max_count is not None and count > schema.max_count):
        return ArrayCount(count=count, min=schema.min_count, max=schema.max_count)

    for index, item in enumerate(items):
        error = _match(schema.child, item, journal)
        if error is not None:
            return ArrayMiss(index=index, value=item, error=error)
    return None


def _match_alternative(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    errors: list[SchemaError] = []
    for option in cast(AlternativeSchema, node).options:
        error = _attempt(option, value, journal)
        if error is None:
            return None
        errors.append(error)
    return AlternativeMiss(value=value, errors=tuple(errors))


def _match_table(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    if not _same_kind(node, value):
        return _mismatch(node, value)
    schema = cast(TableSchema, node)
    table = cast(Mapping[str, object], value)

    if journal is not None:
        _insert_defaults(schema, cast(MutableMapping[str, object], table), journal)

    found_extras = 0
    for key, item in table.items():
        entry = schema.entries.get(key)
        if entry is not None:
            error = _match(entry.schema, item, journal)
            if error is not None:
                return AtKey(key=key, error=error)
            continue

        extra_errors = _match_extras(schema.extras, key, item, journal)
        if extra_errors is not None:
            return TableMiss(key=key, value=item, errors=tuple(extra_errors))
        found_extras += 1

    for key, entry in schema.entries.items():
        if key not in table:
            return MissingKey(key=key, schema=entry.schema)

    if found_extras < schema.min_extra or (
        schema.max_extra is not None and found_extras > schema.max_extra
    ):
        return TableCount(count=found_extras, min=schema.min_extra, max=schema.max_extra)
    return None


def _match_extras(
    extras: Sequence[TableEntry],
    key: str,
    value: object,
    journal: _Journal | None,
) -> list[SchemaError] | None:
    """Return ``None`` on the first accepting extras entry, else every attempt's error."""

    errors: list[SchemaError] = []
    for entry in extras:
        if entry.key.search(key) is None:
            continue
        error = _attempt(entry.schema, value, journal)
        if error is None:
            return None
        errors.append(error)
    return errors


def _insert_defaults(
    schema: TableSchema, table: MutableMapping[str, object], journal: _Journal
) -> None:
    for key, entry in schema.entries.items():
        if entry.has_default and key not in table:
            journal.insert(table, key, copy.deepcopy(entry.default))


def _attempt(node: SchemaNode, value: object, journal: _Journal | None) -> SchemaError | None:
    """Try one candidate schema among several.

    The candidate is matched directly against ``value``; if it is rejected, the
    defaults it inserted are rolled back.
    """

    if journal is None:
        return _match(node, value, None)
    mark = journal.mark()
    error = _match(node, value, journal)
    if error is not None:
        journal.rollback(mark)
    return error


_MATCHERS: Final[Mapping[SchemaType, _Matcher]] = MappingProxyType(
    {
        SchemaType.STRING: _match_string,
        SchemaType.INTEGER: _match_int,
        SchemaType.FLOAT: _match_float,
        SchemaType.BOOL: _match_kind_only,
        SchemaType.DATE: _match_kind_only,
        SchemaType.ARRAY: _match_array,
        SchemaType.TABLE: _match_table,
        SchemaType.ALTERNATIVE: _match_alternative,
        SchemaType.ANYTHING: _match_anything,
        SchemaType.EXACT: _match_exact,
    }
)


__all__ = ["MatchResult", "check", "check_and_complete", "is_valid", "validate"]
