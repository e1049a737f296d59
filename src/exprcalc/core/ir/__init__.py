"""
exprcalc Intermediate Representation (IR) types.

All expression tree types are re-exported from this package.
"""

from .expressions import (
    ADDITIVE_OPS,
    INT64_MAX,
    INT64_MIN,
    LOGICAL_OPS,
    MULTIPLICATIVE_OPS,
    RELATIONAL_OPS,
    Additive,
    Expr,
    IntLiteral,
    Logical,
    Multiplicative,
    Parenthesized,
    Relational,
    render_infix,
)

__all__ = [
    "ADDITIVE_OPS",
    "INT64_MAX",
    "INT64_MIN",
    "LOGICAL_OPS",
    "MULTIPLICATIVE_OPS",
    "RELATIONAL_OPS",
    "Additive",
    "Expr",
    "IntLiteral",
    "Logical",
    "Multiplicative",
    "Parenthesized",
    "Relational",
    "render_infix",
]
