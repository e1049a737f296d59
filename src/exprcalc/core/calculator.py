"""
Calculator driver: parse an expression string, evaluate it, report.

``calculate`` raises on failure. ``try_calculate`` never raises for
calculator errors and returns a CalcResult instead.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from exprcalc.core.errors import CalcError
from exprcalc.core.expression_lang.evaluator import evaluate
from exprcalc.core.expression_lang.parser import parse_expr

logger = logging.getLogger(__name__)


class CalcResult(BaseModel):
    """Outcome of one calculation: a value or an error, never both."""

    ok: bool
    value: int | None = None
    error_kind: str | None = Field(default=None, description="lex, syntax, arithmetic, eval")
    message: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def success(cls, value: int) -> CalcResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: CalcError) -> CalcResult:
        return cls(ok=False, error_kind=error.kind, message=str(error))

    def render(self) -> str:
        """Single output line: the value, or "<kind> error: <message>"."""
        if self.ok:
            return str(self.value)
        return f"{self.error_kind} error: {self.message}"


def calculate(source: str, *, strict: bool = False) -> int:
    """Parse and evaluate an expression string.

    Args:
        source: Expression text
        strict: Reject characters that belong to no token

    Returns:
        The integer result.

    Raises:
        CalcError: Any lex, syntax, arithmetic, or evaluation failure.
    """
    expr = parse_expr(source, strict=strict)
    return evaluate(expr)


def try_calculate(source: str, *, strict: bool = False) -> CalcResult:
    """Like :func:`calculate`, but return failures as a CalcResult."""
    try:
        value = calculate(source, strict=strict)
    except CalcError as e:
        logger.debug("Calculation of %r failed: %s", source, e)
        return CalcResult.failure(e)
    return CalcResult.success(value)
