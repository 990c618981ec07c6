"""Helpers over the TOML value model as produced by ``tomllib``."""

from __future__ import annotations

import datetime as dt
import json
import math
from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias, cast

Value: TypeAlias = (
    str | int | float | bool | dt.datetime | dt.date | dt.time | list["Value"] | dict[str, "Value"]
)

_MAX_RENDER_LENGTH: Final[int] = 80


def value_kind(value: object) -> str:
    """Return the TOML kind name of ``value``.

    Raises ``TypeError`` for Python objects outside the TOML value model.
    """

    if isinstance(value, str):
        return "string"
    # bool must be tested before int.
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return "date"
    if isinstance(value, Mapping):
        return "table"
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return "array"
    raise TypeError(f"{type(value).__name__} is not a TOML value")


def values_equal(left: object, right: object) -> bool:
    """Kind-aware structural equality.

    ``1``, ``1.0`` and ``true`` are all distinct and NaN is never equal to
    anything, itself included.
    """

    kind = value_kind(left)
    if kind != value_kind(right):
        return False
    if kind == "table":
        left_table = cast(Mapping[str, object], left)
        right_table = cast(Mapping[str, object], right)
        if left_table.keys() != right_table.keys():
            return False
        return all(values_equal(left_table[key], right_table[key]) for key in left_table)
    if kind == "array":
        left_items = cast(Sequence[object], left)
        right_items = cast(Sequence[object], right)
        if len(left_items) != len(right_items):
            return False
        return all(values_equal(a, b) for a, b in zip(left_items, right_items, strict=True))
    if kind == "date":
        # datetime subclasses date; keep them apart.
        if type(left) is not type(right) and (
            isinstance(left, dt.datetime) or isinstance(right, dt.datetime)
        ):
            return False
    return bool(left == right)


def render_value(value: object, *, limit: int = _MAX_RENDER_LENGTH) -> str:
    """Render a value compactly for diagnostics, truncating long output."""

    text = json.dumps(to_jsonable(value), ensure_ascii=False, separators=(", ", ": "))
    if len(text) > limit:
        return text[: max(limit - 3, 0)] + "..."
    return text


def to_jsonable(value: object) -> object:
    """Convert a TOML value to plain JSON-compatible data."""

    if isinstance(value, float) and not math.isfinite(value):
        return repr(value)
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return repr(value)


__all__ = ["Value", "render_value", "to_jsonable", "value_kind", "values_equal"]
