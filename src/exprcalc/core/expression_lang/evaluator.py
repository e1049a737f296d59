"""
Expression evaluator for the exprcalc expression language.

Evaluates expression tree nodes to a signed 64-bit integer. Pure
evaluation with no I/O and no side effects, so a tree can be evaluated
any number of times with the same result.

The walk uses an explicit work stack, so long operator chains such as
``1 + 1 + ... + 1`` evaluate regardless of the interpreter's recursion
limit.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from exprcalc.core.errors import DivisionByZeroError, EvalError, IntegerOverflowError
from exprcalc.core.ir.expressions import (
    INT64_MAX,
    INT64_MIN,
    Additive,
    Expr,
    IntLiteral,
    Logical,
    Multiplicative,
    Parenthesized,
    Relational,
)

logger = logging.getLogger(__name__)


def evaluate(expr: Expr) -> int:
    """Evaluate an expression tree.

    Children are evaluated before their parent operator is applied, left
    operand first.

    Args:
        expr: Parsed expression AST.

    Returns:
        The computed value. Relational and logical nodes yield 1 or 0.

    Raises:
        DivisionByZeroError: On integer division by zero.
        IntegerOverflowError: If a result leaves the signed 64-bit range.
        EvalError: If a node holds an operator it does not implement.
    """
    result = _interpret(expr)
    logger.debug("Evaluated %s to %d", expr, result)
    return result


def _interpret(expr: Expr) -> int:
    """Post-order walk: both operand values are on ``values`` before their operator runs."""
    values: list[int] = []
    # (node, operands_done)
    stack: list[tuple[Expr, bool]] = [(expr, False)]

    while stack:
        node, operands_done = stack.pop()

        if isinstance(node, IntLiteral):
            values.append(node.value)
            continue

        if isinstance(node, Parenthesized):
            stack.append((node.inner, False))
            continue

        apply = _BINARY_HANDLERS.get(type(node))
        if apply is None:
            raise EvalError(f"Unknown expression type: {type(node).__name__}")

        if operands_done:
            right = values.pop()
            left = values.pop()
            values.append(apply(node, left, right))
        else:
            stack.append((node, True))
            stack.append((node.right, False))
            stack.append((node.left, False))

    return values.pop()


def _apply_logical(expr: Logical, left: int, right: int) -> int:
    """and/or test operands for > 0; xor compares them as booleans."""
    op = expr.op.lower()

    if op == "and":
        return int(left > 0 and right > 0)
    if op == "or":
        return int(left > 0 or right > 0)
    if op == "xor":
        return int(bool(left) ^ bool(right))

    raise EvalError(f"Unimplemented logical operator: {expr.op!r}")


def _apply_relational(expr: Relational, left: int, right: int) -> int:
    op = expr.op

    if op == "<":
        return int(left < right)
    if op == "<=":
        return int(left <= right)
    if op == ">":
        return int(left > right)
    if op == ">=":
        return int(left >= right)
    if op == "==":
        return int(left == right)
    if op in ("!=", "/="):
        return int(left != right)

    raise EvalError(f"Unimplemented relational operator: {op!r}")


def _apply_additive(expr: Additive, left: int, right: int) -> int:
    if expr.op == "+":
        return _checked(left + right, left, expr.op, right)
    if expr.op == "-":
        return _checked(left - right, left, expr.op, right)

    raise EvalError(f"Unimplemented additive operator: {expr.op!r}")


def _apply_multiplicative(expr: Multiplicative, left: int, right: int) -> int:
    if expr.op == "*":
        return _checked(left * right, left, expr.op, right)
    if expr.op == "/":
        if right == 0:
            raise DivisionByZeroError("Division by zero")
        return _checked(_truncating_div(left, right), left, expr.op, right)

    raise EvalError(f"Unimplemented multiplicative operator: {expr.op!r}")


_BINARY_HANDLERS: dict[type, Callable[..., int]] = {
    Logical: _apply_logical,
    Relational: _apply_relational,
    Additive: _apply_additive,
    Multiplicative: _apply_multiplicative,
}


def _truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        return -quotient
    return quotient


def _checked(value: int, left: int, op: str, right: int) -> int:
    """Reject results outside the signed 64-bit range."""
    if value < INT64_MIN or value > INT64_MAX:
        raise IntegerOverflowError(f"Integer overflow: {left} {op} {right}")
    return value
