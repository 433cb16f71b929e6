from __future__ import annotations

from typing import Sequence

from eqn.dsl.lexer import tokenize
from eqn.dsl.nodes import Node, Operand, Operator
from eqn.dsl.postfix import to_postfix
from eqn.dsl.tokens import OPERAND_TOKENS, Token, TokenValue
from eqn.errors import EquationSyntaxError


def build_tree(postfix: Sequence[TokenValue] | None) -> Node:
    if not postfix:
        raise EquationSyntaxError("Postfix token list cannot be null or empty")
    stack: list[Node] = []
    for tok in postfix:
        if tok.type in OPERAND_TOKENS:
            stack.append(Operand(tok.text))
        elif tok.type == Token.OPERATOR:
            if len(stack) < 2:
                raise EquationSyntaxError("Invalid postfix expression: insufficient operands for operator")
            right = stack.pop()
            left = stack.pop()
            stack.append(Operator(tok.text, left, right))
        else:
            # Parentheses never survive to_postfix.
            raise RuntimeError(f"Unexpected token in postfix expression: {tok.type}")
    if len(stack) != 1:
        raise EquationSyntaxError("Invalid postfix expression: should result in exactly one root node")
    return stack[0]


def parse(text: str | None) -> Node:
    return build_tree(to_postfix(tokenize(text)))
