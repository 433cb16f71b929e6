from __future__ import annotations

from typing import Sequence

from eqn.dsl.tokens import OPERAND_TOKENS, Token, TokenValue, is_left_associative, precedence
from eqn.errors import EquationSyntaxError


def _should_pop(stack_op: str, incoming_op: str) -> bool:
    top = precedence(stack_op)
    cur = precedence(incoming_op)
    if top > cur:
        return True
    return top == cur and is_left_associative(incoming_op)


def to_postfix(tokens: Sequence[TokenValue] | None) -> list[TokenValue]:
    """Shunting-yard conversion of infix tokens to postfix order."""
    if not tokens:
        raise EquationSyntaxError("Token list cannot be null or empty")
    output: list[TokenValue] = []
    stack: list[TokenValue] = []
    for tok in tokens:
        if tok.type in OPERAND_TOKENS:
            output.append(tok)
        elif tok.type == Token.OPERATOR:
            while stack and stack[-1].type == Token.OPERATOR and _should_pop(stack[-1].text, tok.text):
                output.append(stack.pop())
            stack.append(tok)
        elif tok.type == Token.LPAREN:
            stack.append(tok)
        elif tok.type == Token.RPAREN:
            while stack:
                top = stack.pop()
                if top.type == Token.LPAREN:
                    break
                output.append(top)
            else:
                raise EquationSyntaxError("Unbalanced parentheses: missing left parenthesis")
    while stack:
        top = stack.pop()
        if top.is_paren:
            raise EquationSyntaxError("Unbalanced parentheses: missing right parenthesis")
        output.append(top)
    return output
