"""
Error types for exprcalc tokenizing, parsing, and evaluation.
"""

from dataclasses import dataclass


@dataclass
class ErrorContext:
    """
    Location of an error inside the expression source.

    Attributes:
        source: The full expression text
        position: 0-based character offset of the offending token
    """

    source: str
    position: int

    def format(self) -> str:
        """
        Format the context as the source line with a caret marker.

        Returns:
            Two lines: the source and a "^" under the error position
        """
        return f"{self.source}\n{' ' * self.position}^"


class CalcError(Exception):
    """Base exception for all exprcalc errors."""

    kind = "error"

    def __init__(
        self,
        message: str,
        position: int | None = None,
        context: ErrorContext | None = None,
    ):
        self.message = message
        self.position = position
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.position is not None:
            return f"{self.message} (at position {self.position})"
        return self.message


class LexError(CalcError):
    """
    Raised when the input cannot be turned into tokens.

    Examples:
    - Empty or whitespace-only input
    - Input with no recognizable token at all
    - A stray character while tokenizing in strict mode
    """

    kind = "lex"


class ExprSyntaxError(CalcError):
    """
    Raised when the token sequence does not match the grammar.

    Examples:
    - A primary that is neither an integer nor "("
    - Unterminated parenthesis
    - Tokens left over after a complete expression
    - Integer literal outside the signed 64-bit range
    """

    kind = "syntax"


class CalcArithmeticError(CalcError, ArithmeticError):
    """Raised when integer arithmetic cannot produce a result."""

    kind = "arithmetic"


class DivisionByZeroError(CalcArithmeticError, ZeroDivisionError):
    """Raised on integer division by zero."""

    pass


class IntegerOverflowError(CalcArithmeticError, OverflowError):
    """Raised when a result leaves the signed 64-bit range."""

    pass


class EvalError(CalcError):
    """
    Raised when a tree node cannot be evaluated.

    Examples:
    - An operator spelling the node does not implement
    - A tree nested too deeply to dump as JSON
    """

    kind = "eval"


class ConfigError(Exception):
    """Raised when an exprcalc configuration file is missing or invalid."""

    pass


def with_context(error: CalcError, source: str) -> CalcError:
    """
    Attach the expression source to an error that carries a position.

    Args:
        error: The error to decorate
        source: Full expression text

    Returns:
        The same error instance, with ``context`` set when possible
    """
    if error.position is not None and error.context is None:
        error.context = ErrorContext(source=source, position=error.position)
    return error
