from __future__ import annotations

import json

import typer

from eqn.api.schemas import json_number
from eqn.dsl.lexer import tokenize
from eqn.dsl.nodes import depth, variables_of
from eqn.dsl.postfix import to_postfix
from eqn.dsl.tree import build_tree
from eqn.errors import EquationError
from eqn.interp.core import evaluate
from eqn.morph.equiv import generate_hash
from eqn.util.logging import configure_logging, get_logger

app = typer.Typer(add_completion=False)


def parse_bindings(items: list[str]) -> dict[str, float]:
    bindings: dict[str, float] = {}
    for item in items:
        name, sep, raw = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise typer.BadParameter(f"expected name=value, got {item!r}", param_hint="--var")
        try:
            bindings[name] = float(raw)
        except ValueError:
            raise typer.BadParameter(f"not a number: {raw!r}", param_hint="--var") from None
    return bindings


@app.command()
def main(
    expression: str = typer.Argument(..., help="Infix expression, e.g. 'x + y * 2'."),
    var: list[str] = typer.Option([], "--var", "-v", help="Variable binding name=value (repeatable)."),
    show_postfix: bool = typer.Option(False, "--show-postfix"),
    show_hash: bool = typer.Option(False, "--show-hash"),
    show_tree: bool = typer.Option(False, "--show-tree"),
    no_eval: bool = typer.Option(False, "--no-eval", help="Parse only; skip evaluation."),
) -> None:
    configure_logging()
    logger = get_logger(__name__)
    bindings = parse_bindings(var)
    report: dict[str, object] = {"infix": expression.strip()}
    try:
        postfix = to_postfix(tokenize(expression))
        root = build_tree(postfix)
        report["variables"] = variables_of(root)
        report["depth"] = depth(root)
        if show_postfix:
            report["postfix"] = [tok.text for tok in postfix]
        if show_hash:
            report["hash"] = generate_hash(root)
        if show_tree:
            report["tree"] = root.to_dict()
        if not no_eval:
            report["result"] = json_number(evaluate(root, bindings))
    except EquationError as exc:
        logger.error("eval_expr failed code=%s message=%s", exc.code, exc.message)
        raise typer.Exit(code=1)
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    app()
