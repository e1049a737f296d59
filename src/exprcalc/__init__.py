"""
exprcalc - integer expression calculator.

Tokenizes, parses, and evaluates arithmetic, comparison, and logical
expressions such as ``(2 + 3) * 4 > 10 and 1`` to a 64-bit integer.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.calculator import CalcResult, calculate, try_calculate
from .core.errors import (
    CalcError,
    DivisionByZeroError,
    EvalError,
    ExprSyntaxError,
    IntegerOverflowError,
    LexError,
)
from .core.expression_lang import evaluate, parse_expr, tokenize

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "CalcResult",
    "calculate",
    "try_calculate",
    "evaluate",
    "parse_expr",
    "tokenize",
    "CalcError",
    "LexError",
    "ExprSyntaxError",
    "DivisionByZeroError",
    "IntegerOverflowError",
    "EvalError",
]
