"""
Binary operator coercion for propexpr values.

Both operands of a binary operator are converted into a single target
kind before the operation runs. The target is the first kind in
``TYPE_PRIORITY`` that one operand already has and the other can be
converted to. Boolean is never a target and String only is for ``+``.
When nothing qualifies, or the operation is undefined in the chosen
domain, the result is Absent.

    combine(Integer(value=4), String(value="3"), BinaryOp.ADD)  # Integer 7
    combine(String(value="2"), String(value="2"), BinaryOp.ADD)  # String "22"
"""

from __future__ import annotations

import math
import re
from typing import assert_never

from propexpr.core.ir.expressions import BinaryOp
from propexpr.core.ir.values import (
    ABSENT,
    Absent,
    Boolean,
    Float,
    Integer,
    List,
    String,
    Value,
    ValueKind,
    from_double,
    from_int,
    from_literal_string,
    kind_of,
)

TYPE_PRIORITY: tuple[ValueKind, ...] = (
    ValueKind.BOOLEAN,
    ValueKind.FLOAT,
    ValueKind.INTEGER,
    ValueKind.STRING,
)

# Text a String must hold to take part in arithmetic
_INT_TEXT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_TEXT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def can_convert(value: Value, kind: ValueKind) -> bool:
    """Whether ``value`` may be converted to ``kind`` for coercion."""
    if kind == ValueKind.INTEGER:
        if isinstance(value, String):
            return _INT_TEXT_RE.fullmatch(value.value.strip()) is not None
        return isinstance(value, (Integer, Float, Boolean))
    if kind == ValueKind.FLOAT:
        if isinstance(value, String):
            return _FLOAT_TEXT_RE.fullmatch(value.value.strip()) is not None
        return isinstance(value, (Integer, Float, Boolean))
    if kind == ValueKind.STRING:
        return isinstance(value, String)
    if kind == ValueKind.BOOLEAN:
        return isinstance(value, Boolean)
    # Absent and List are never coercion targets
    return False


def select_target(left: Value, right: Value, op: BinaryOp) -> ValueKind | None:
    """Pick the kind the operation runs in, or None when nothing fits."""
    left_kind = kind_of(left)
    right_kind = kind_of(right)
    for kind in TYPE_PRIORITY:
        if kind == ValueKind.BOOLEAN:
            continue
        if kind == ValueKind.STRING and op != BinaryOp.ADD:
            continue
        if (left_kind == kind and can_convert(right, kind)) or (
            right_kind == kind and can_convert(left, kind)
        ):
            return kind
    return None


def combine(left: Value, right: Value, op: BinaryOp | str) -> Value:
    """Apply a binary operator to two values.

    Args:
        left: Left operand.
        right: Right operand.
        op: One of ``+ - * / **``.

    Returns:
        The result in the selected domain, or Absent when no coercion
        target exists, when an operand is too large for the target, on
        division by zero, and when ``**`` has no real or finite result.
    """
    op = BinaryOp(op)
    target = select_target(left, right, op)
    if target is None:
        return ABSENT
    if target == ValueKind.FLOAT:
        try:
            lhs, rhs = _to_float(left), _to_float(right)
        except OverflowError:
            return ABSENT
        return _float_op(lhs, rhs, op)
    if target == ValueKind.INTEGER:
        try:
            lhs_int, rhs_int = _to_int(left), _to_int(right)
        except ValueError:
            # Numeric text past the interpreter's integer digit limit
            return ABSENT
        return _int_op(lhs_int, rhs_int, op)
    if target == ValueKind.STRING:
        if op == BinaryOp.ADD:
            return from_literal_string(_to_str(left) + _to_str(right))
        return ABSENT
    return ABSENT


# ---------------------------------------------------------------------------
# Domain operations
# ---------------------------------------------------------------------------


def _int_op(lhs: int, rhs: int, op: BinaryOp) -> Value:
    if op == BinaryOp.ADD:
        return from_int(lhs + rhs)
    if op == BinaryOp.SUB:
        return from_int(lhs - rhs)
    if op == BinaryOp.MUL:
        return from_int(lhs * rhs)
    if op == BinaryOp.DIV:
        if rhs == 0:
            return ABSENT
        return from_int(_truncating_divide(lhs, rhs))
    if op == BinaryOp.POW:
        return _power(lhs, rhs)
    assert_never(op)


def _float_op(lhs: float, rhs: float, op: BinaryOp) -> Value:
    if op == BinaryOp.ADD:
        return from_double(lhs + rhs)
    if op == BinaryOp.SUB:
        return from_double(lhs - rhs)
    if op == BinaryOp.MUL:
        return from_double(lhs * rhs)
    if op == BinaryOp.DIV:
        if rhs == 0:
            return ABSENT
        return from_double(lhs / rhs)
    if op == BinaryOp.POW:
        return _power(lhs, rhs)
    assert_never(op)


def _power(lhs: float, rhs: float) -> Value:
    # Always floating point, even in the integer domain
    try:
        return from_double(math.pow(lhs, rhs))
    except (OverflowError, ValueError):
        return ABSENT


def _truncating_divide(lhs: int, rhs: int) -> int:
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


# ---------------------------------------------------------------------------
# Conversions (only called after can_convert approved them)
# ---------------------------------------------------------------------------


def _to_int(value: Value) -> int:
    if isinstance(value, Integer):
        return value.value
    if isinstance(value, Float):
        return int(value.value)
    if isinstance(value, Boolean):
        return int(value.value)
    if isinstance(value, String):
        return int(value.value.strip())
    if isinstance(value, (Absent, List)):
        raise TypeError(f"{kind_of(value)} does not convert to an integer")
    assert_never(value)


def _to_float(value: Value) -> float:
    if isinstance(value, (Integer, Float)):
        return float(value.value)
    if isinstance(value, Boolean):
        return float(value.value)
    if isinstance(value, String):
        return float(value.value.strip())
    if isinstance(value, (Absent, List)):
        raise TypeError(f"{kind_of(value)} does not convert to a float")
    assert_never(value)


def _to_str(value: Value) -> str:
    if isinstance(value, String):
        return value.value
    raise TypeError(f"{kind_of(value)} does not convert to a string")
