from __future__ import annotations

from eqn.dsl.nodes import Node
from eqn.dsl.tree import parse


def generate_hash(node: Node) -> str:
    """Canonical fully-parenthesized rendering of a tree.

    Whitespace and redundant parentheses never reach the tree, so they do
    not affect the result. Operand order and variable names do: ``a+b``,
    ``b+a`` and ``x+y`` all hash differently, as do ``3`` and ``3.0``.
    """
    return node.generate_hash()


def expressions_equivalent(a: str, b: str) -> bool:
    return generate_hash(parse(a)) == generate_hash(parse(b))
