"""
tomlschema — error taxonomy.

File: src/tomlschema/errors.py
Last updated: 2026-10-18

Purpose
- Define the compile-time (schema construction) and validation-time (matching)
  failure types.

What should be included in this file
- ``SchemaConstructionError`` carrying field, expected shape, actual value and a
  root-to-failure context trail.
- The closed ``SchemaError`` family produced by the matching engine, composed by
  wrapping so the chain from schema root to failing leaf is preserved.

Functional requirements
- Every error renders to a readable, deterministic, indented trace.
- Validation errors reference the offending value fragments; they never copy them.

Non-functional requirements
- No imports of the constructor or matcher (keeps the dependency graph acyclic).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from tomlschema.values import render_value

if TYPE_CHECKING:
    from tomlschema.schema_type import SchemaType

PathStep = str | int

_UNSET: Final[object] = object()


def format_path(path: tuple[PathStep, ...]) -> str:
    """Render a breadcrumb path as ``a.b[2].c`` (``<root>`` when empty)."""

    if not path:
        return "<root>"
    rendered = ""
    for step in path:
        if isinstance(step, int):
            rendered += f"[{step}]"
        elif rendered:
            rendered += f".{step}"
        else:
            rendered = step
    return rendered


# ---------------------------------------------------------------------------
# Construction errors
# ---------------------------------------------------------------------------


class SchemaConstructionError(ValueError):
    """Raised when a schema document cannot be compiled."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        expected: str | None = None,
        actual: object = _UNSET,
        context: tuple[str, ...] = (),
        path: tuple[PathStep, ...] = (),
    ) -> None:
        self.message = message
        self.field = field
        self.expected = expected
        self.actual = actual
        self.context = context
        self.path = path
        super().__init__(self._render())

    @classmethod
    def bad_shape(cls, field: str, expected: str, actual: object) -> SchemaConstructionError:
        """Build the error for a recognized option whose value has the wrong shape."""

        return cls(
            f"'{field}' must be {expected} but got {render_value(actual)}",
            field=field,
            expected=expected,
            actual=actual,
        )

    @property
    def has_actual(self) -> bool:
        return self.actual is not _UNSET

    def wrap(self, description: str, *steps: PathStep) -> SchemaConstructionError:
        """Return a copy with an outer context entry (and document path steps) prepended."""

        return SchemaConstructionError(
            self.message,
            field=self.field,
            expected=self.expected,
            actual=self.actual,
            context=(description, *self.context),
            path=(*steps, *self.path),
        )

    def _render(self) -> str:
        if not self.context:
            return self.message
        lines = [self.context[0]]
        for depth, item in enumerate(self.context[1:], start=1):
            lines.append("  " * depth + item)
        lines.append("  " * len(self.context) + self.message)
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------


class SchemaError(ValueError):
    """Base class for every mismatch reported by the matching engine."""

    def describe(self) -> str:
        """One-line description of this failure, without its causes."""

        raise NotImplementedError

    @property
    def children(self) -> tuple[SchemaError, ...]:
        return ()

    def _step(self) -> PathStep | None:
        return None

    @property
    def path(self) -> tuple[PathStep, ...]:
        """Keys and indices from the candidate root down to the failing position."""

        steps: list[PathStep] = []
        for node in self._chain():
            step = node._step()
            if step is not None:
                steps.append(step)
        return tuple(steps)

    @property
    def leaf(self) -> SchemaError:
        """The innermost error reached by following single-cause wrappers."""

        node: SchemaError = self
        for node in self._chain():
            pass
        return node

    def _chain(self) -> Iterator[SchemaError]:
        node: SchemaError = self
        while True:
            yield node
            if node._step() is None:
                return
            node = node.children[0]

    def render(self, indent: str = "  ") -> str:
        """Indented trace of this error and all of its causes."""

        lines: list[str] = []
        self._render_into(lines, 0, indent)
        return "\n".join(lines)

    def _render_into(self, lines: list[str], depth: int, indent: str) -> None:
        lines.append(f"{indent * depth}{self.describe()}")
        for child in self.children:
            child._render_into(lines, depth + 1, indent)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation used by machine-readable reports."""

        payload: dict[str, Any] = {
            "kind": type(self).__name__,
            "message": self.describe(),
        }
        if self.children:
            payload["causes"] = [child.to_dict() for child in self.children]
        return payload

    def __str__(self) -> str:
        return self.render()


@dataclass(eq=False)
class TypeMismatch(SchemaError):
    expected: SchemaType
    got: SchemaType
    value: object = None

    def describe(self) -> str:
        return f"expected {self.expected.type_name} but got {self.got.type_name}"


@dataclass(eq=False)
class RegexMiss(SchemaError):
    string: str
    pattern: str

    def describe(self) -> str:
        return f"regex {self.pattern!r} does not match {self.string!r}"


@dataclass(eq=False)
class ExactMiss(SchemaError):
    expected: object
    value: object

    def describe(self) -> str:
        return f"{render_value(self.value)} is not exactly {render_value(self.expected)}"


@dataclass(eq=False)
class IntMiss(SchemaError):
    value: int
    min: int
    max: int

    def describe(self) -> str:
        return f"int {self.value} is outside [{self.min}, {self.max}]"


@dataclass(eq=False)
class FloatMiss(SchemaError):
    value: float
    min: float
    max: float
    nan_ok: bool

    def describe(self) -> str:
        if self.value != self.value:
            return "float nan is not allowed (nan_ok = false)"
        return f"float {self.value!r} is outside [{self.min!r}, {self.max!r}]"


def _bound(value: int | None) -> str:
    return "inf" if value is None else str(value)


@dataclass(eq=False)
class ArrayCount(SchemaError):
    count: int
    min: int
    max: int | None

    def describe(self) -> str:
        return f"array has {self.count} elements, expected [{self.min}, {_bound(self.max)}]"


@dataclass(eq=False)
class ArrayMiss(SchemaError):
    index: int
    value: object
    error: SchemaError

    @property
    def children(self) -> tuple[SchemaError, ...]:
        return (self.error,)

    def _step(self) -> PathStep | None:
        return self.index

    def describe(self) -> str:
        return f"at index {self.index} ({render_value(self.value)})"


@dataclass(eq=False)
class AtKey(SchemaError):
    key: str
    error: SchemaError

    @property
    def children(self) -> tuple[SchemaError, ...]:
        return (self.error,)

    def _step(self) -> PathStep | None:
        return self.key

    def describe(self) -> str:
        return f"at key {self.key!r}"


@dataclass(eq=False)
class MissingKey(SchemaError):
    key: str
    schema: object = None

    def describe(self) -> str:
        return f"missing required key {self.key!r}"


@dataclass(eq=False)
class TableMiss(SchemaError):
    key: str
    value: object
    errors: tuple[SchemaError, ...] = ()

    @property
    def children(self) -> tuple[SchemaError, ...]:
        return self.errors

    def describe(self) -> str:
        if not self.errors:
            return f"key {self.key!r} matches no entry or extras pattern"
        return (
            f"no extras schema accepts key {self.key!r} "
            f"(value = {render_value(self.value)}), {len(self.errors)} candidate(s) failed"
        )

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["key"] = self.key
        return payload


@dataclass(eq=False)
class TableCount(SchemaError):
    count: int
    min: int
    max: int | None

    def describe(self) -> str:
        return f"table has {self.count} extra keys, expected [{self.min}, {_bound(self.max)}]"


@dataclass(eq=False)
class AlternativeMiss(SchemaError):
    value: object
    errors: tuple[SchemaError, ...] = ()

    @property
    def children(self) -> tuple[SchemaError, ...]:
        return self.errors

    def describe(self) -> str:
        return f"no alternative matched {render_value(self.value)}"


__all__ = [
    "AlternativeMiss",
    "ArrayCount",
    "ArrayMiss",
    "AtKey",
    "ExactMiss",
    "FloatMiss",
    "IntMiss",
    "MissingKey",
    "PathStep",
    "RegexMiss",
    "SchemaConstructionError",
    "SchemaError",
    "TableCount",
    "TableMiss",
    "TypeMismatch",
    "format_path",
]
