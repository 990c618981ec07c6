"""
tomlschema — compiled schema model.

File: src/tomlschema/model.py
Last updated: 2026-10-18

Purpose
- Define the recursive, closed set of compiled schema node types.

What should be included in this file
- One frozen dataclass per node kind, each tagged with its ``SchemaType``.
- ``TableEntry`` (extras pattern + schema) and ``LiteralEntry`` (child schema +
  optional default) used inside ``TableSchema``.
- Bound constants shared by the constructor and the matcher.

Non-functional requirements
- Nodes are immutable after construction and safe to share across threads.
- Child nodes are exclusively owned by their parent (strict tree, no cycles).
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Final, TypeAlias

from tomlschema.schema_type import SchemaType

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1
MATCH_ALL_PATTERN: Final[str] = ".*"


@dataclass(frozen=True, slots=True)
class StringSchema:
    kind: ClassVar[SchemaType] = SchemaType.STRING

    pattern: re.Pattern[str] = field(default_factory=lambda: re.compile(MATCH_ALL_PATTERN))


@dataclass(frozen=True, slots=True)
class IntegerSchema:
    kind: ClassVar[SchemaType] = SchemaType.INTEGER

    min: int = INT64_MIN
    max: int = INT64_MAX


@dataclass(frozen=True, slots=True)
class FloatSchema:
    kind: ClassVar[SchemaType] = SchemaType.FLOAT

    min: float = -math.inf
    max: float = math.inf
    nan_ok: bool = False


@dataclass(frozen=True, slots=True)
class BoolSchema:
    kind: ClassVar[SchemaType] = SchemaType.BOOL


@dataclass(frozen=True, slots=True)
class DateSchema:
    kind: ClassVar[SchemaType] = SchemaType.DATE


@dataclass(frozen=True, slots=True)
class AnythingSchema:
    kind: ClassVar[SchemaType] = SchemaType.ANYTHING


@dataclass(frozen=True, slots=True)
class ExactSchema:
    kind: ClassVar[SchemaType] = SchemaType.EXACT

    value: object


@dataclass(frozen=True, slots=True)
class ArraySchema:
    kind: ClassVar[SchemaType] = SchemaType.ARRAY

    child: SchemaNode
    min_count: int = 0
    # None means unbounded.
    max_count: int | None = None


@dataclass(frozen=True, slots=True)
class TableEntry:
    """Regex-keyed extras entry of a table schema."""

    key: re.Pattern[str]
    schema: SchemaNode


@dataclass(frozen=True, slots=True)
class LiteralEntry:
    """Explicitly named table entry; ``default`` is ``None`` when the key is required."""

    schema: SchemaNode
    default: object = None

    @property
    def has_default(self) -> bool:
        return self.default is not None


@dataclass(frozen=True, slots=True)
class TableSchema:
    kind: ClassVar[SchemaType] = SchemaType.TABLE

    entries: Mapping[str, LiteralEntry] = field(default_factory=lambda: MappingProxyType({}))
    extras: tuple[TableEntry, ...] = ()
    min_extra: int = 0
    # None means unbounded.
    max_extra: int | None = None


@dataclass(frozen=True, slots=True)
class AlternativeSchema:
    kind: ClassVar[SchemaType] = SchemaType.ALTERNATIVE

    options: tuple[SchemaNode, ...] = ()


SchemaNode: TypeAlias = (
    StringSchema
    | IntegerSchema
    | FloatSchema
    | BoolSchema
    | DateSchema
    | AnythingSchema
    | ExactSchema
    | ArraySchema
    | TableSchema
    | AlternativeSchema
)


__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "MATCH_ALL_PATTERN",
    "AlternativeSchema",
    "AnythingSchema",
    "ArraySchema",
    "BoolSchema",
    "DateSchema",
    "ExactSchema",
    "FloatSchema",
    "IntegerSchema",
    "LiteralEntry",
    "SchemaNode",
    "StringSchema",
    "TableEntry",
    "TableSchema",
]
