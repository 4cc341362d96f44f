"""
Expression evaluator for the propexpr expression language.

Reduces expression AST nodes to a single Value, reading identifiers from
a SymbolContext. Pure evaluation: the only side effects are reads
against the context. Does NOT use Python's eval().

``evaluate`` never raises for bad user input. Syntax errors, unknown
symbols, ill-typed operators and division by zero all come back as
Absent; ``evaluate_detailed`` additionally says why when parsing failed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import assert_never

from pydantic import BaseModel, ConfigDict, Field

from propexpr.core.errors import ParseError
from propexpr.core.expression_lang.coercion import combine
from propexpr.core.expression_lang.parser import parse_expr
from propexpr.core.ir.expressions import (
    BinaryExpr,
    CallExpr,
    Expr,
    Literal,
    SymbolRef,
    TupleExpr,
)
from propexpr.core.ir.values import ABSENT, Value, from_literal_string, from_sequence
from propexpr.core.symbols import ReadOnlyContext, SymbolContext

logger = logging.getLogger(__name__)

# (callee, argument) -> result
CalleeResolver = Callable[[Value, Value], Value]

FUNCTION_PLACEHOLDER = "FUNCTION"


def make_placeholder_resolver(placeholder: str = FUNCTION_PLACEHOLDER) -> CalleeResolver:
    """Build a resolver that answers every call with a fixed string."""
    result = from_literal_string(placeholder)

    def resolve(callee: Value, argument: Value) -> Value:
        return result

    return resolve


placeholder_resolver = make_placeholder_resolver()


class Evaluation(BaseModel):
    """Result of ``evaluate_detailed``: the value plus an optional diagnostic."""

    value: Value = Field(default=ABSENT, description="Reduced value, Absent on failure")
    error: str | None = Field(default=None, description="Why parsing failed, if it did")

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.error is None


def reduce(
    expr: Expr,
    context: SymbolContext | None = None,
    *,
    resolver: CalleeResolver | None = None,
) -> Value:
    """Reduce an expression tree to a value, left to right.

    Args:
        expr: Parsed expression AST.
        context: Symbol table for identifier lookups. Without one every
            identifier reduces to Absent.
        resolver: Handler for call expressions. Defaults to
            ``placeholder_resolver``.

    Returns:
        The computed value.
    """
    return _reduce(expr, context, resolver or placeholder_resolver)


def _reduce(expr: Expr, ctx: SymbolContext | None, resolver: CalleeResolver) -> Value:
    """Dispatch reduction to the appropriate handler."""
    if isinstance(expr, Literal):
        return expr.value

    if isinstance(expr, SymbolRef):
        if ctx is None:
            return ABSENT
        return ctx.read(expr.name)

    if isinstance(expr, BinaryExpr):
        return _reduce_chain(expr, ctx, resolver)

    if isinstance(expr, TupleExpr):
        return from_sequence(_reduce(item, ctx, resolver) for item in expr.items)

    if isinstance(expr, CallExpr):
        callee = _reduce(expr.callee, ctx, resolver)
        argument = _reduce(expr.argument, ctx, resolver)
        return resolver(callee, argument)

    assert_never(expr)


def _reduce_chain(expr: BinaryExpr, ctx: SymbolContext | None, resolver: CalleeResolver) -> Value:
    """Fold a left-associative operator chain without recursing per operator.

    ``1 + 2 + 3`` parses as ``(1 + 2) + 3``; walking the left spine keeps
    stack depth tied to parenthesis and tuple nesting only.
    """
    spine: list[BinaryExpr] = []
    node: Expr = expr
    while isinstance(node, BinaryExpr):
        spine.append(node)
        node = node.left

    value = _reduce(node, ctx, resolver)
    for binary in reversed(spine):
        right = _reduce(binary.right, ctx, resolver)
        value = combine(value, right, binary.op)
    return value


def evaluate_detailed(
    text: str,
    context: SymbolContext | None = None,
    *,
    resolver: CalleeResolver | None = None,
) -> Evaluation:
    """Parse and reduce ``text``, reporting parse failures alongside Absent.

    Args:
        text: Expression source, e.g. ``"3 + FOO * 2"``.
        context: Optional symbol table. Wrapped read-only for the
            duration of the call.
        resolver: Optional handler for call expressions.

    Returns:
        An Evaluation whose ``error`` is None unless the text could not
        be parsed in full.
    """
    try:
        expr = parse_expr(text)
    except ParseError as e:
        logger.debug("Expression %r did not parse: %s", text, e.message)
        return Evaluation(value=ABSENT, error=str(e))
    except RecursionError:
        logger.debug("Expression %r nests too deeply to parse", text)
        return Evaluation(value=ABSENT, error="Expression nests too deeply")

    guarded = ReadOnlyContext(context) if context is not None else None
    try:
        value = reduce(expr, guarded, resolver=resolver)
    except RecursionError:
        logger.debug("Expression %r nests too deeply to evaluate", text)
        return Evaluation(value=ABSENT, error="Expression nests too deeply")
    return Evaluation(value=value)


def evaluate(
    text: str,
    context: SymbolContext | None = None,
    *,
    resolver: CalleeResolver | None = None,
) -> Value:
    """Evaluate expression text against an optional symbol context.

    Returns Absent for malformed input, input with unconsumed trailing
    text, unknown symbols, ill-typed operators and division by zero.
    """
    return evaluate_detailed(text, context, resolver=resolver).value
