"""
JSON serialization of expression trees.

Each node is dumped with its ``kind`` discriminator, so a dumped tree
validates back into the same node types.
"""

from __future__ import annotations

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from exprcalc.core.errors import EvalError
from exprcalc.core.ir.expressions import Expr

_EXPR_ADAPTER: TypeAdapter[Expr] = TypeAdapter(Expr)


def to_json(expr: Expr, indent: int | None = None) -> str:
    """Dump an expression tree as JSON.

    Raises:
        EvalError: If the tree is deeper than the serializer can nest.
    """
    try:
        return _EXPR_ADAPTER.dump_json(expr, indent=indent).decode("utf-8")
    except (PydanticSerializationError, RecursionError) as e:
        raise EvalError("Expression nested too deeply to serialize") from e


def from_json(text: str | bytes) -> Expr:
    """Load an expression tree from JSON produced by :func:`to_json`.

    Raises:
        pydantic.ValidationError: If the document is not a valid tree.
    """
    return _EXPR_ADAPTER.validate_json(text)
