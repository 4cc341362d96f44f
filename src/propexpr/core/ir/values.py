"""
Dynamic value types for propexpr.

Every expression reduces to exactly one of a closed family of frozen
models: Absent, Boolean, Integer, Float, String, or List. ``Value`` is
their union. Absent doubles as the error channel of the expression
language: unknown symbols, ill-typed operators, division by zero and
malformed input all produce it.

Usage:
    from propexpr.core.ir.values import from_int, from_sequence, as_display_string

    pair = from_sequence([from_int(1), from_int(2)])
    as_display_string(pair)  # "[1, 2]"
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any, assert_never

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------


class ValueKind(StrEnum):
    """The cases a Value can take."""

    ABSENT = "absent"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    LIST = "list"


# ---------------------------------------------------------------------------
# Value cases
# ---------------------------------------------------------------------------


class Absent(BaseModel):
    """No result: failure, undefined symbol, or ill-typed operation."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return as_display_string(self)


class Boolean(BaseModel):
    """A true/false value."""

    value: bool

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return as_display_string(self)


class Integer(BaseModel):
    """A signed integer."""

    value: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return as_display_string(self)


class Float(BaseModel):
    """A double precision number."""

    value: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return as_display_string(self)


class String(BaseModel):
    """A text value."""

    value: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return as_display_string(self)


class List(BaseModel):
    """An ordered sequence of values, produced by comma tuples."""

    items: tuple[Value, ...] = Field(default=(), description="Element values")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return as_display_string(self)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Value = Absent | Boolean | Integer | Float | String | List

List.model_rebuild()

ABSENT = Absent()


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def from_literal_string(text: str) -> String:
    return String(value=text)


def from_bool(flag: bool) -> Boolean:
    return Boolean(value=flag)


def from_int(number: int) -> Integer:
    return Integer(value=number)


def from_double(number: float) -> Float:
    return Float(value=float(number))


def from_sequence(values: Iterable[Value]) -> Value:
    """Build a value from a tuple of values.

    A single element collapses to that element, so ``(x)`` and ``x`` are
    indistinguishable downstream. Any other length produces a List.
    """
    items = tuple(values)
    if len(items) == 1:
        return items[0]
    return List(items=items)


def from_python(obj: Any) -> Value:
    """Convert a native Python object into a Value.

    Args:
        obj: None, bool, int, float, str, a list/tuple of those, or a Value.

    Returns:
        The corresponding Value. Lists go through ``from_sequence`` so a
        one-element list becomes a scalar.

    Raises:
        TypeError: If the object has no Value representation.
    """
    if isinstance(obj, (Absent, Boolean, Integer, Float, String, List)):
        return obj
    if obj is None:
        return ABSENT
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return from_bool(obj)
    if isinstance(obj, int):
        return from_int(obj)
    if isinstance(obj, float):
        return from_double(obj)
    if isinstance(obj, str):
        return from_literal_string(obj)
    if isinstance(obj, (list, tuple)):
        return from_sequence(from_python(item) for item in obj)
    raise TypeError(f"Cannot represent {type(obj).__name__} as a value")


# ---------------------------------------------------------------------------
# Inspection and rendering
# ---------------------------------------------------------------------------


def kind_of(value: Value) -> ValueKind:
    if isinstance(value, Absent):
        return ValueKind.ABSENT
    if isinstance(value, Boolean):
        return ValueKind.BOOLEAN
    if isinstance(value, Integer):
        return ValueKind.INTEGER
    if isinstance(value, Float):
        return ValueKind.FLOAT
    if isinstance(value, String):
        return ValueKind.STRING
    if isinstance(value, List):
        return ValueKind.LIST
    assert_never(value)


def is_absent(value: Value) -> bool:
    return isinstance(value, Absent)


def as_display_string(value: Value) -> str:
    """Render a value as text.

    Absent renders as ``Undefined``. Floats use the shortest text that
    round-trips, without a trailing ``.0``.
    """
    if isinstance(value, Absent):
        return "Undefined"
    if isinstance(value, Boolean):
        return "true" if value.value else "false"
    if isinstance(value, Integer):
        return str(value.value)
    if isinstance(value, Float):
        return _format_float(value.value)
    if isinstance(value, String):
        return value.value
    if isinstance(value, List):
        return "[" + ", ".join(as_display_string(item) for item in value.items) + "]"
    assert_never(value)


def to_python(value: Value) -> Any:
    """Convert a Value back into plain Python data (Absent becomes None)."""
    if isinstance(value, Absent):
        return None
    if isinstance(value, (Boolean, Integer, Float, String)):
        return value.value
    if isinstance(value, List):
        return [to_python(item) for item in value.items]
    assert_never(value)


def _format_float(number: float) -> str:
    text = repr(number)
    if text.endswith(".0"):
        return text[:-2]
    return text
