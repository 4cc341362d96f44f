"""
Recursive descent parser for the propexpr expression language.

Grammar (precedence low to high):
    statement   → expression EOF
    expression  → tuple expression?          (second part makes a call)
    tuple       → addsub ("," addsub)*
    addsub      → term (("+"|"-") term)*
    term        → exponent (("*"|"/") exponent)*
    exponent    → factor ("**" factor)*      (left-associative)
    factor      → value | "(" expression ")"
    value       → literal | IDENT
    literal     → STRING | "true" | "false" | signed INT | signed FLOAT

A "+" or "-" written directly against a number in value position is
the number's sign (``2.0**-1``). Anywhere else it is a binary operator,
so ``2-3`` subtracts.
"""

from __future__ import annotations

from propexpr.core.errors import ParseError
from propexpr.core.expression_lang.tokenizer import (
    ExpressionTokenError,
    Token,
    TokenKind,
    tokenize,
)
from propexpr.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    CallExpr,
    Expr,
    Literal,
    SymbolRef,
    TupleExpr,
)
from propexpr.core.ir.values import from_bool, from_double, from_int, from_literal_string

# Tokens that can begin an expression; seeing one right after a complete
# tuple turns that tuple into a callee.
_EXPRESSION_START = frozenset(
    {
        TokenKind.STRING,
        TokenKind.INT,
        TokenKind.FLOAT,
        TokenKind.TRUE,
        TokenKind.FALSE,
        TokenKind.IDENT,
        TokenKind.LPAREN,
    }
)

_ADDSUB_OPS = {TokenKind.PLUS: BinaryOp.ADD, TokenKind.MINUS: BinaryOp.SUB}
_TERM_OPS = {TokenKind.STAR: BinaryOp.MUL, TokenKind.SLASH: BinaryOp.DIV}


class ExpressionParseError(ParseError):
    """Error during expression parsing."""


class _Parser:
    """Recursive descent parser for expressions."""

    def __init__(self, tokens: list[Token], source: str) -> None:
        self.tokens = tokens
        self.source = source
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]  # EOF

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise self.error(f"Expected {kind}, got {tok.kind} ({tok.value!r})", tok)
        return self.advance()

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.current.kind in kinds:
            return self.advance()
        return None

    def error(self, message: str, tok: Token) -> ExpressionParseError:
        return ExpressionParseError(message, tok.pos, self.source)

    # -- Grammar rules --

    def parse_statement(self) -> Expr:
        """expression EOF"""
        expr = self.parse_expression()
        if self.current.kind != TokenKind.EOF:
            raise self.error(
                f"Unexpected token after expression: {self.current.value!r}",
                self.current,
            )
        return expr

    def parse_expression(self) -> Expr:
        """tuple expression?"""
        callee = self.parse_tuple()
        if self.current.kind in _EXPRESSION_START:
            argument = self.parse_expression()
            return CallExpr(callee=callee, argument=argument)
        return callee

    def parse_tuple(self) -> Expr:
        """addsub (',' addsub)*"""
        items = [self.parse_addsub()]
        while self.match(TokenKind.COMMA):
            items.append(self.parse_addsub())
        if len(items) == 1:
            return items[0]
        return TupleExpr(items=items)

    def parse_addsub(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.current.kind in _ADDSUB_OPS:
            op = _ADDSUB_OPS[self.advance().kind]
            right = self.parse_term()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """exponent (('*' | '/') exponent)*"""
        left = self.parse_exponent()
        while self.current.kind in _TERM_OPS:
            op = _TERM_OPS[self.advance().kind]
            right = self.parse_exponent()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_exponent(self) -> Expr:
        """factor ('**' factor)*"""
        left = self.parse_factor()
        while self.match(TokenKind.POWER):
            right = self.parse_factor()
            left = BinaryExpr(op=BinaryOp.POW, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """value | '(' expression ')'"""
        if self.match(TokenKind.LPAREN):
            expr = self.parse_expression()
            self.expect(TokenKind.RPAREN)
            return expr
        return self.parse_value()

    def parse_value(self) -> Expr:
        """literal | IDENT"""
        tok = self.current

        if tok.kind == TokenKind.STRING:
            self.advance()
            return Literal(value=from_literal_string(tok.value))
        if tok.kind == TokenKind.TRUE:
            self.advance()
            return Literal(value=from_bool(True))
        if tok.kind == TokenKind.FALSE:
            self.advance()
            return Literal(value=from_bool(False))
        if tok.kind in (TokenKind.INT, TokenKind.FLOAT):
            self.advance()
            return self._number(tok, tok.value)
        if self._at_signed_number():
            sign = self.advance()
            number = self.advance()
            return self._number(number, sign.value + number.value, sign)
        if tok.kind == TokenKind.IDENT:
            self.advance()
            return SymbolRef(name=tok.value)

        if tok.kind == TokenKind.EOF:
            raise self.error("Unexpected end of expression", tok)
        raise self.error(f"Unexpected token: {tok.kind} ({tok.value!r})", tok)

    def _at_signed_number(self) -> bool:
        sign = self.current
        number = self.peek(1)
        return (
            sign.kind in _ADDSUB_OPS
            and number.kind in (TokenKind.INT, TokenKind.FLOAT)
            and number.pos == sign.pos + 1
        )

    def _number(self, number: Token, text: str, start: Token | None = None) -> Literal:
        if number.kind == TokenKind.FLOAT:
            return Literal(value=from_double(float(text)))
        try:
            return Literal(value=from_int(int(text)))
        except ValueError:
            # int() refuses text past the interpreter's digit limit
            raise self.error("Integer literal is too long", start or number) from None


def parse_expr(source: str) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "3 + FOO * 2")

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionParseError: If the expression is invalid or input is
            left over after a complete expression.
        ExpressionTokenError: If tokenization fails.
    """
    return _Parser(tokenize(source), source).parse_statement()


__all__ = [
    "ExpressionParseError",
    "ExpressionTokenError",
    "parse_expr",
]
