"""
exprcalc expression language.

Tokenizer, parser, evaluator, and JSON serializer for integer
arithmetic, comparison, and logical expressions.

Usage:
    from exprcalc.core.expression_lang import parse_expr, evaluate

    expr = parse_expr("555/5 + 1 - 100")
    result = evaluate(expr)
    # result == 12
"""

from exprcalc.core.expression_lang.evaluator import evaluate
from exprcalc.core.expression_lang.parser import parse, parse_expr
from exprcalc.core.expression_lang.serializer import from_json, to_json
from exprcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "Token",
    "TokenKind",
    "evaluate",
    "from_json",
    "parse",
    "parse_expr",
    "to_json",
    "tokenize",
]
