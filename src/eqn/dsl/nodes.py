from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, TypeVar, Union

from eqn.errors import MissingVariableError
from eqn.interp.core import apply_operator, try_parse_number

T = TypeVar("T")


@dataclass(frozen=True)
class Operand:
    """Leaf holding a numeric literal's text or a variable name."""

    symbol: str

    def evaluate(self, variables: Mapping[str, float]) -> float:
        value = try_parse_number(self.symbol)
        if value is not None:
            return value
        if self.symbol not in variables:
            raise MissingVariableError(self.symbol)
        return float(variables[self.symbol])

    def generate_hash(self) -> str:
        return self.symbol

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "operand", "symbol": self.symbol}


@dataclass(frozen=True, eq=False, repr=False)
class Operator:
    """Binary operator node; owns exactly two children.

    Walks use an explicit stack, never Python recursion, so chains like
    ``1+1+...+1`` of any length are fine. Equality compares canonical strings.
    """

    op: str
    left: Node
    right: Node

    def __post_init__(self) -> None:
        if self.left is None or self.right is None:
            raise ValueError(f"Operator '{self.op}' requires two children")

    def evaluate(self, variables: Mapping[str, float]) -> float:
        return fold(
            self,
            lambda leaf: leaf.evaluate(variables),
            lambda node, left, right: apply_operator(node.op, left, right),
        )

    def generate_hash(self) -> str:
        parts: list[str] = []
        stack: list[Node | str] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Operand):
                parts.append(item.symbol)
            else:
                stack.extend((")", item.right, item.op, item.left, "("))
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return fold(
            self,
            lambda leaf: leaf.to_dict(),
            lambda node, left, right: {"kind": "operator", "op": node.op, "left": left, "right": right},
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Operator):
            return NotImplemented
        return self is other or self.generate_hash() == other.generate_hash()

    def __hash__(self) -> int:
        return hash(self.generate_hash())

    def __repr__(self) -> str:
        return f"Operator({self.generate_hash()!r})"


Node = Union[Operand, Operator]


def fold(root: Node, leaf: Callable[[Operand], T], combine: Callable[[Operator, T, T], T]) -> T:
    """Post-order reduction; the left subtree is always finished before the right."""
    results: list[T] = []
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if isinstance(node, Operand):
            results.append(leaf(node))
        elif expanded:
            right = results.pop()
            left = results.pop()
            results.append(combine(node, left, right))
        else:
            stack.append((node, True))
            stack.append((node.right, False))
            stack.append((node.left, False))
    return results[0]


def depth(node: Node) -> int:
    return fold(node, lambda leaf: 1, lambda _, left, right: 1 + max(left, right))


def variables_of(node: Node) -> list[str]:
    """Variable names in left-to-right leaf order, without duplicates."""
    seen: dict[str, None] = {}
    stack: list[Node] = [node]
    while stack:
        cur = stack.pop()
        if isinstance(cur, Operand):
            if try_parse_number(cur.symbol) is None:
                seen.setdefault(cur.symbol, None)
        else:
            stack.append(cur.right)
            stack.append(cur.left)
    return list(seen)
