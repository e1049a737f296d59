"""Core exprcalc functionality: IR, tokenizer, parser, evaluator, configuration."""

from . import ir
from .calculator import CalcResult, calculate, try_calculate
from .config import CalcConfig, load_config
from .errors import (
    CalcArithmeticError,
    CalcError,
    ConfigError,
    DivisionByZeroError,
    ErrorContext,
    EvalError,
    ExprSyntaxError,
    IntegerOverflowError,
    LexError,
)

__all__ = [
    "ir",
    "CalcResult",
    "calculate",
    "try_calculate",
    "CalcConfig",
    "load_config",
    "CalcError",
    "LexError",
    "ExprSyntaxError",
    "CalcArithmeticError",
    "DivisionByZeroError",
    "IntegerOverflowError",
    "EvalError",
    "ConfigError",
    "ErrorContext",
]
