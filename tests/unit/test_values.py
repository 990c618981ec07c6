"""Unit tests for value classification, equality and the schema type taxonomy."""

from __future__ import annotations

import datetime as dt
import math

import pytest

from tomlschema.errors import SchemaConstructionError
from tomlschema.model import AnythingSchema, ExactSchema, TableSchema
from tomlschema.schema_type import SchemaType
from tomlschema.values import render_value, to_jsonable, value_kind, values_equal


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        ("text", "string"),
        (True, "bool"),
        (0, "int"),
        (0.5, "float"),
        (dt.date(2024, 5, 1), "date"),
        (dt.datetime(2024, 5, 1, 12, 0), "date"),
        (dt.time(12, 0), "date"),
        ({}, "table"),
        ([], "array"),
    ],
)
def test_value_kind_classifies_toml_values(value: object, kind: str) -> None:
    assert value_kind(value) == kind
    assert SchemaType.of_value(value) is SchemaType(kind)


@pytest.mark.parametrize("value", [None, b"bytes", object()])
def test_value_kind_rejects_foreign_objects(value: object) -> None:
    with pytest.raises(TypeError):
        value_kind(value)


def test_schema_type_names_round_trip() -> None:
    assert [member.type_name for member in SchemaType] == [
        "string",
        "int",
        "float",
        "bool",
        "date",
        "array",
        "table",
        "alternative",
        "anything",
        "exact",
    ]
    assert SchemaType.parse("alternative") is SchemaType.ALTERNATIVE


def test_schema_type_parse_rejects_unknown_names() -> None:
    with pytest.raises(SchemaConstructionError, match="unrecognized schema type 'integer'"):
        SchemaType.parse("integer")


def test_schema_type_of_node() -> None:
    assert SchemaType.of_node(TableSchema()) is SchemaType.TABLE
    assert SchemaType.of_node(AnythingSchema()) is SchemaType.ANYTHING
    assert SchemaType.of_node(ExactSchema(value=1)) is SchemaType.EXACT


@pytest.mark.parametrize(
    ("left", "right", "equal"),
    [
        (1, 1, True),
        (1, 1.0, False),
        (1, True, False),
        (0, False, False),
        ("a", "a", True),
        ([1, [2]], [1, [2]], True),
        ([1, 2], [2, 1], False),
        ({"a": 1, "b": 2}, {"b": 2, "a": 1}, True),
        ({"a": 1}, {"a": 1, "b": 2}, False),
        (dt.date(2024, 1, 1), dt.datetime(2024, 1, 1), False),
        (dt.date(2024, 1, 1), dt.date(2024, 1, 1), True),
        (math.nan, math.nan, False),
    ],
)
def test_values_equal_is_kind_aware(left: object, right: object, equal: bool) -> None:
    assert values_equal(left, right) is equal
    assert values_equal(right, left) is equal


def test_render_value_truncates_long_output() -> None:
    rendered = render_value("x" * 200, limit=20)

    assert len(rendered) == 20
    assert rendered.endswith("...")


def test_to_jsonable_converts_dates_and_non_finite_floats() -> None:
    value = {"when": dt.date(2024, 1, 2), "ratio": math.inf, "items": [math.nan, 1]}

    assert to_jsonable(value) == {"when": "2024-01-02", "ratio": "inf", "items": ["nan", 1]}
