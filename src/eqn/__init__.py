from __future__ import annotations

from eqn.dsl.lexer import tokenize
from eqn.dsl.postfix import to_postfix
from eqn.dsl.tree import build_tree, parse
from eqn.interp.core import evaluate
from eqn.morph.equiv import generate_hash

__version__ = "0.1.0"

__all__ = [
    "build_tree",
    "evaluate",
    "generate_hash",
    "parse",
    "to_postfix",
    "tokenize",
]
