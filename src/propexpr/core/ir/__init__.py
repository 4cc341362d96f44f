"""
Intermediate representation for propexpr: runtime values and expression trees.
"""

from .expressions import BinaryExpr, BinaryOp, CallExpr, Expr, Literal, SymbolRef, TupleExpr
from .values import (
    ABSENT,
    Absent,
    Boolean,
    Float,
    Integer,
    List,
    String,
    Value,
    ValueKind,
    as_display_string,
    from_bool,
    from_double,
    from_int,
    from_literal_string,
    from_python,
    from_sequence,
    is_absent,
    kind_of,
    to_python,
)

__all__ = [
    # Values
    "ABSENT",
    "Absent",
    "Boolean",
    "Float",
    "Integer",
    "List",
    "String",
    "Value",
    "ValueKind",
    "as_display_string",
    "from_bool",
    "from_double",
    "from_int",
    "from_literal_string",
    "from_python",
    "from_sequence",
    "is_absent",
    "kind_of",
    "to_python",
    # Expressions
    "BinaryExpr",
    "BinaryOp",
    "CallExpr",
    "Expr",
    "Literal",
    "SymbolRef",
    "TupleExpr",
]
