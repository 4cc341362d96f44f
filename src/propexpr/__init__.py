"""
propexpr - small expressions over a host application's named properties.

Evaluates literals, arithmetic, string concatenation and symbol lookups
such as ``3 + FOO * 2`` into a single dynamically typed Value.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import ManifestError, ParseError, PropexprError, SymbolWriteError
from .core.expression_lang import evaluate, evaluate_detailed, parse_expr
from .core.symbols import PropertyMap, SymbolContext

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "evaluate",
    "evaluate_detailed",
    "parse_expr",
    "PropertyMap",
    "SymbolContext",
    "PropexprError",
    "ParseError",
    "ManifestError",
    "SymbolWriteError",
]
