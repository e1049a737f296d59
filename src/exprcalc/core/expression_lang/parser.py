"""
Recursive descent parser for the exprcalc expression language.

Grammar (precedence low to high, all binary levels left-associative):
    logical    → relation (LOGICAL_OP relation)*
    relation   → term (REL_OP term)*
    term       → factor (ADD_OP factor)*
    factor     → primary (MUL_OP primary)*
    primary    → INTEGER | "(" logical ")"
"""

from __future__ import annotations

import logging

from exprcalc.core.errors import ExprSyntaxError, LexError, with_context
from exprcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from exprcalc.core.ir.expressions import (
    INT64_MAX,
    Additive,
    Expr,
    IntLiteral,
    Logical,
    Multiplicative,
    Parenthesized,
    Relational,
)

logger = logging.getLogger(__name__)


class _Parser:
    """Recursive descent parser over an immutable token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    @property
    def current(self) -> Token | None:
        """The token under the cursor, or None at end of input."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    @property
    def end_pos(self) -> int:
        """Source position just past the last token."""
        if not self.tokens:
            return 0
        last = self.tokens[-1]
        return last.pos + len(last.value)

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def match(self, kind: TokenKind) -> Token | None:
        tok = self.current
        if tok is not None and tok.kind == kind:
            return self.advance()
        return None

    # -- Grammar rules --

    def parse_logical(self) -> Expr:
        """relation (LOGICAL_OP relation)*"""
        left = self.parse_relation()
        while op := self.match(TokenKind.LOGICAL):
            right = self.parse_relation()
            left = Logical(op=op.value, left=left, right=right)
        return left

    def parse_relation(self) -> Expr:
        """term (REL_OP term)*"""
        left = self.parse_term()
        while op := self.match(TokenKind.RELATIONAL):
            right = self.parse_term()
            left = Relational(op=op.value, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """factor (('+' | '-') factor)*"""
        left = self.parse_factor()
        while op := self.match(TokenKind.ADDITIVE):
            right = self.parse_factor()
            left = Additive(op=op.value, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """primary (('*' | '/') primary)*"""
        left = self.parse_primary()
        while op := self.match(TokenKind.MULTIPLICATIVE):
            right = self.parse_primary()
            left = Multiplicative(op=op.value, left=left, right=right)
        return left

    def parse_primary(self) -> Expr:
        """INTEGER | '(' logical ')'"""
        tok = self.current

        if tok is None:
            raise ExprSyntaxError("Unexpected end of input", self.end_pos)

        if tok.kind == TokenKind.INTEGER:
            self.advance()
            digits = tok.value.lstrip("0") or "0"
            if len(digits) > len(str(INT64_MAX)) or int(digits) > INT64_MAX:
                raise ExprSyntaxError(f"Integer literal out of range: {tok.value}", tok.pos)
            return IntLiteral(value=int(digits))

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            inner = self.parse_logical()
            if self.match(TokenKind.RPAREN) is None:
                closing = self.current
                if closing is None:
                    raise ExprSyntaxError("Unterminated parenthesis", tok.pos)
                raise ExprSyntaxError(f"Expected ')', got {closing.value!r}", closing.pos)
            return Parenthesized(inner=inner)

        raise ExprSyntaxError(f"Unexpected token: {tok.value!r}", tok.pos)


def parse(tokens: list[Token]) -> Expr:
    """Parse a token sequence into an expression tree.

    Args:
        tokens: Tokens from :func:`tokenize`

    Returns:
        Root node of the expression tree.

    Raises:
        ExprSyntaxError: If the tokens do not form exactly one expression.
    """
    parser = _Parser(tokens)
    try:
        expr = parser.parse_logical()
    except RecursionError as e:
        raise ExprSyntaxError("Expression nested too deeply") from e

    # Ensure all tokens consumed
    if parser.current is not None:
        raise ExprSyntaxError(
            f"Unexpected token after expression: {parser.current.value!r}",
            parser.current.pos,
        )

    return expr


def parse_expr(source: str, *, strict: bool = False) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "(2 + 3) * 4 > 10 and 1")
        strict: Reject characters that belong to no token

    Returns:
        Parsed expression AST.

    Raises:
        LexError: If tokenization fails.
        ExprSyntaxError: If the expression is invalid.
    """
    try:
        tokens = tokenize(source, strict=strict)
        expr = parse(tokens)
    except (LexError, ExprSyntaxError) as e:
        with_context(e, source)
        raise

    logger.debug("Parsed %r as %s", source, expr)
    return expr
