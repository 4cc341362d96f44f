"""
propexpr expression language.

Tokenizer, parser, coercion rules, and evaluator for small expressions
over a host application's named properties.

Usage:
    from propexpr.core.expression_lang import evaluate
    from propexpr.core.symbols import PropertyMap

    result = evaluate("3 + FOO * 2", PropertyMap({"FOO": 2}))
    # result == Integer(value=7)
"""

from propexpr.core.expression_lang.coercion import combine
from propexpr.core.expression_lang.evaluator import (
    CalleeResolver,
    Evaluation,
    evaluate,
    evaluate_detailed,
    make_placeholder_resolver,
    placeholder_resolver,
    reduce,
)
from propexpr.core.expression_lang.parser import parse_expr

__all__ = [
    "CalleeResolver",
    "Evaluation",
    "combine",
    "evaluate",
    "evaluate_detailed",
    "make_placeholder_resolver",
    "parse_expr",
    "placeholder_resolver",
    "reduce",
]
