"""Closed taxonomy of schema and value kinds, used for type names and diagnostics."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from tomlschema.errors import SchemaConstructionError
from tomlschema.values import value_kind

if TYPE_CHECKING:
    from tomlschema.model import SchemaNode


class SchemaType(Enum):
    STRING = "string"
    INTEGER = "int"
    FLOAT = "float"
    BOOL = "bool"
    DATE = "date"
    ARRAY = "array"
    TABLE = "table"
    ALTERNATIVE = "alternative"
    ANYTHING = "anything"
    EXACT = "exact"

    @property
    def type_name(self) -> str:
        """Spelling of this kind in a schema document's ``type`` key."""

        return self.value

    @classmethod
    def parse(cls, name: str) -> SchemaType:
        """Parse a ``type`` string; unknown names raise ``SchemaConstructionError``."""

        try:
            return cls(name)
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise SchemaConstructionError(
                f"unrecognized schema type {name!r} (expected one of: {known})",
                field="type",
                expected="a schema type name",
                actual=name,
            ) from None

    @classmethod
    def of_value(cls, value: object) -> SchemaType:
        """Classify a TOML value. Never returns ALTERNATIVE, ANYTHING or EXACT."""

        return cls(value_kind(value))

    @classmethod
    def of_node(cls, node: SchemaNode) -> SchemaType:
        return node.kind


__all__ = ["SchemaType"]
