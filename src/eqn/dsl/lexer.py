from __future__ import annotations

import re

from eqn.dsl.tokens import Token, TokenValue
from eqn.errors import EquationSyntaxError

_WHITESPACE_RE = re.compile(r"\s+")

# Tried in order at every position; first match wins.
_TOKEN_PATTERNS: list[tuple[re.Pattern[str], Token | None]] = [
    (re.compile(r"[0-9]+(?:\.[0-9]+)?"), Token.NUMBER),
    (re.compile(r"[a-zA-Z]+"), Token.VARIABLE),
    (re.compile(r"[+\-*/^]"), Token.OPERATOR),
    (re.compile(r"\("), Token.LPAREN),
    (re.compile(r"\)"), Token.RPAREN),
]


def strip_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub("", text)


def tokenize(text: str | None) -> list[TokenValue]:
    """Split an infix expression into typed tokens in source order.

    All whitespace is removed before scanning, so reported positions are
    offsets into the stripped string.
    """
    if text is None or not text.strip():
        raise EquationSyntaxError("Expression cannot be null or empty")
    src = strip_whitespace(text)
    tokens: list[TokenValue] = []
    pos = 0
    while pos < len(src):
        for pattern, token_type in _TOKEN_PATTERNS:
            m = pattern.match(src, pos)
            if m:
                tokens.append(TokenValue(token_type, m[0]))
                pos = m.end()
                break
        else:
            ch = src[pos]
            raise EquationSyntaxError(
                f"Illegal character '{ch}' at position {pos}",
                char=ch,
                position=pos,
            )
    if not tokens:
        raise EquationSyntaxError("Expression contains no valid tokens")
    return tokens
