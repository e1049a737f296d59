"""
Expression tree types for exprcalc.

A closed set of immutable node types. Every node evaluates to a signed
64-bit integer:

- Logical: and, or, xor (case-insensitive)
- Relational: <, <=, >, >=, ==, !=, /=
- Additive: +, -
- Multiplicative: *, /
- IntLiteral: a signed 64-bit integer
- Parenthesized: a transparent wrapper around a sub-tree

Operators are kept as their source spelling. The evaluator resolves them
by textual equality, so a node built by hand with an unknown spelling is
representable and rejected at evaluation time.
"""

from __future__ import annotations

from typing import Annotated
from typing import Literal as TypeLiteral

from pydantic import BaseModel, ConfigDict, Field

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# ---------------------------------------------------------------------------
# Operator spellings
# ---------------------------------------------------------------------------

LOGICAL_OPS = frozenset({"and", "or", "xor"})
RELATIONAL_OPS = frozenset({"<", "<=", ">", ">=", "==", "!=", "/="})
ADDITIVE_OPS = frozenset({"+", "-"})
MULTIPLICATIVE_OPS = frozenset({"*", "/"})


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class IntLiteral(BaseModel):
    """A literal signed 64-bit integer."""

    kind: TypeLiteral["int"] = "int"
    value: int = Field(ge=INT64_MIN, le=INT64_MAX, description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class Parenthesized(BaseModel):
    """A sub-expression written inside parentheses."""

    kind: TypeLiteral["paren"] = "paren"
    inner: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return render_infix(self)


class _BinaryNode(BaseModel):
    """Shared shape of the four operator nodes: left op right."""

    op: str = Field(description="Operator as written in the source")
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return render_infix(self)


class Logical(_BinaryNode):
    """Logical operation: and, or, xor. Result is 1 or 0."""

    kind: TypeLiteral["logical"] = "logical"


class Relational(_BinaryNode):
    """Comparison: <, <=, >, >=, ==, != (also /=). Result is 1 or 0."""

    kind: TypeLiteral["relational"] = "relational"


class Additive(_BinaryNode):
    """Addition or subtraction."""

    kind: TypeLiteral["additive"] = "additive"


class Multiplicative(_BinaryNode):
    """Multiplication or truncating division."""

    kind: TypeLiteral["multiplicative"] = "multiplicative"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Annotated[
    Logical | Relational | Additive | Multiplicative | IntLiteral | Parenthesized,
    Field(discriminator="kind"),
]

# Rebuild models for recursive forward references
Parenthesized.model_rebuild()
_BinaryNode.model_rebuild()
Logical.model_rebuild()
Relational.model_rebuild()
Additive.model_rebuild()
Multiplicative.model_rebuild()
# ---------------------------------------------------------------------------
# Infix rendering
# ---------------------------------------------------------------------------


def render_infix(expr: Expr) -> str:
    """Render a tree as fully parenthesized infix text.

    Walks with an explicit stack, so arbitrarily long operator chains
    render without recursion.
    """
    parts: list[str] = []
    stack: list[Expr | str] = [expr]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, IntLiteral):
            parts.append(str(item.value))
        elif isinstance(item, Parenthesized):
            stack.extend((")", item.inner, "("))
        else:
            stack.extend((")", item.right, f" {item.op} ", item.left, "("))

    return "".join(parts)
