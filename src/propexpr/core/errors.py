"""
Error types for propexpr parsing, configuration, and symbol access.

None of these escape ``evaluate``; it reports every failure as Absent.
They surface from ``parse_expr``, ``load_manifest`` and the diagnostic
channel of ``evaluate_detailed``.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class PropexprError(Exception):
    """Base exception for all propexpr errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(PropexprError):
    """
    Raised when expression text cannot be tokenized or parsed.

    Examples:
    - Unterminated string literal
    - Unexpected character or token
    - Unbalanced parentheses
    - Input left over after a complete expression
    """

    def __init__(self, message: str, pos: int = 0, source: str | None = None):
        self.pos = pos
        self.source = source
        context = ErrorContext(source=source, column=pos + 1) if source is not None else None
        super().__init__(message, context)


class ManifestError(PropexprError):
    """
    Raised when a propexpr.toml manifest cannot be loaded.

    Examples:
    - Invalid TOML
    - Symbol value with no expression-language counterpart
    - Wrongly typed evaluator option
    """

    pass


class SymbolWriteError(PropexprError):
    """Raised when writing to a read-only symbol context."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a single-line expression.

    Attributes:
        source: The expression text
        column: Column number (1-indexed)
        file: Optional file the expression was read from
    """

    source: str
    column: int
    file: Path | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "<expression>:5" followed by the snippet
        """
        origin = str(self.file) if self.file else "<expression>"
        return f"{origin}:{self.column}\n{self._format_snippet()}"

    def _format_snippet(self) -> str:
        """Format the source with an error marker under the column."""
        prefix = "   1 | "
        # Newlines in the source would break the marker alignment
        line = self.source.replace("\n", " ").replace("\r", " ")
        marker_pos = len(prefix) + self.column - 1
        return f"{prefix}{line}\n" + " " * marker_pos + "^^^"

