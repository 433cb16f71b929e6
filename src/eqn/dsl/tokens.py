from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

PRECEDENCE = MappingProxyType({
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
})

RIGHT_ASSOCIATIVE = frozenset({"^"})


class Token(str, Enum):
    NUMBER = "NUMBER"
    VARIABLE = "VARIABLE"
    OPERATOR = "OPERATOR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"

    def __str__(self) -> str:
        return self.value


OPERAND_TOKENS = frozenset({Token.NUMBER, Token.VARIABLE})
PAREN_TOKENS = frozenset({Token.LPAREN, Token.RPAREN})


@dataclass(frozen=True, order=True)
class TokenValue:
    type: Token
    text: str

    def __str__(self) -> str:
        return f"({self.type}, {self.text})"

    @property
    def is_paren(self) -> bool:
        return self.type in PAREN_TOKENS


def precedence(op: str) -> int:
    if op not in PRECEDENCE:
        raise ValueError(f"Unknown operator: {op}")
    return PRECEDENCE[op]


def is_left_associative(op: str) -> bool:
    return op not in RIGHT_ASSOCIATIVE


def token_types(tokens: list[TokenValue]) -> list[Token]:
    return [tok.type for tok in tokens]
