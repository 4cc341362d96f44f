"""
Expression tree for propexpr.

The parser builds these nodes; the evaluator reduces them to a Value.

Supports:
- Literals: 555, 3.14159, true, "text", 'text'
- Symbol references: FOO, scene_width
- Arithmetic and concatenation: +, -, *, /, **
- Tuples: 1, 'FOO', 2.5
- Calls: a tuple directly followed by another expression (``FUNCTION FOO``)
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from propexpr.core.ir.values import String, Value

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators, all folded left to right."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "**"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A literal boolean, integer, float or string."""

    value: Value = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if isinstance(self.value, String):
            return repr(self.value.value)
        return str(self.value)


class SymbolRef(BaseModel):
    """Reference to a named property in the symbol context."""

    name: str = Field(description="Symbol name, case-sensitive")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class TupleExpr(BaseModel):
    """Two or more comma-separated expressions, reduced to a List."""

    items: list[Expr] = Field(description="Element expressions")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "(" + ", ".join(str(i) for i in self.items) + ")"


class CallExpr(BaseModel):
    """
    Juxtaposition: a tuple immediately followed by an expression.

    The callee and argument are reduced first, then handed to the
    evaluator's callee resolver.
    """

    callee: Expr = Field(description="Expression in callee position")
    argument: Expr = Field(description="Expression in argument position")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.callee}({self.argument})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | SymbolRef | BinaryExpr | TupleExpr | CallExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
TupleExpr.model_rebuild()
CallExpr.model_rebuild()
