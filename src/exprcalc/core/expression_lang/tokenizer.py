"""
Tokenizer for the exprcalc expression language.

Scans an expression string into a sequence of typed tokens. The scanner
searches for the leftmost match of one combined pattern instead of
anchoring at every character, so characters that start no token are
skipped. Strict mode turns such characters into a LexError.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum, auto

from exprcalc.core.errors import LexError

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    LOGICAL = auto()
    RELATIONAL = auto()
    ADDITIVE = auto()
    MULTIPLICATIVE = auto()
    INTEGER = auto()
    LPAREN = auto()
    RPAREN = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.value, self.pos) == (other.kind, other.value, other.pos)

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.pos))


# Alternatives in priority order; group names are TokenKind values.
_TOKEN_RE = re.compile(
    r"(?P<logical>(?i:and|or|xor))"
    r"|(?P<relational><=|>=|==|!=|/=|[<>])"
    r"|(?P<additive>[+\-])"
    r"|(?P<multiplicative>[*/])"
    r"|(?P<integer>[0-9]+)"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
)


def tokenize(source: str, *, strict: bool = False) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Args:
        source: Expression text (e.g., "555/5 + 1 - 100")
        strict: Reject characters that belong to no token instead of
            skipping them

    Returns:
        Tokens in source order. Never empty.

    Raises:
        LexError: If no token is found, or on a stray character in
            strict mode.
    """
    tokens: list[Token] = []
    last_end = 0

    for m in _TOKEN_RE.finditer(source):
        if strict:
            _check_gap(source, last_end, m.start())
        kind = TokenKind(m.lastgroup)
        tokens.append(Token(kind, m.group(0), m.start()))
        last_end = m.end()

    if strict:
        _check_gap(source, last_end, len(source))

    if not tokens:
        raise LexError("No tokens found in expression")

    logger.debug("Tokenized %d characters into %d tokens", len(source), len(tokens))
    return tokens


def _check_gap(source: str, start: int, end: int) -> None:
    """Raise on the first non-whitespace character in source[start:end]."""
    for i in range(start, end):
        if not source[i].isspace():
            raise LexError(f"Unexpected character: {source[i]!r}", i)
