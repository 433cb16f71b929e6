import eqn
from eqn.api import app
from eqn.dsl import lexer, postfix, tree
from eqn.interp import core
from eqn.morph import equiv
from eqn.store import memory


def test_imports_and_facade() -> None:
    assert eqn.__version__
    for mod in (app, lexer, postfix, tree, core, equiv, memory):
        assert mod is not None
    root = eqn.parse("(a + b) * c")
    assert eqn.generate_hash(root) == "((a+b)*c)"
    assert eqn.evaluate(root, {"a": 2, "b": 3, "c": 4}) == 20.0
    assert eqn.build_tree(eqn.to_postfix(eqn.tokenize("a+b"))) == eqn.parse("a + b")
