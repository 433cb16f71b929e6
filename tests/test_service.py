from __future__ import annotations

import threading

import pytest

from eqn.dsl.tokens import Token
from eqn.errors import (
    CallerArgumentError,
    DivisionByZeroError,
    EquationNotFoundError,
    EquationSyntaxError,
    MissingVariableError,
)
from eqn.service import EquationService


def test_store_trims_and_records_postfix_types() -> None:
    svc = EquationService()
    eid = svc.store_equation("  x + y * 2 ")
    [dto] = svc.get_all_equations()
    assert dto.id == eid
    assert dto.infix == "x + y * 2"
    assert dto.postfix == [Token.VARIABLE, Token.VARIABLE, Token.NUMBER, Token.OPERATOR, Token.OPERATOR]


def test_equivalent_expressions_share_an_id() -> None:
    svc = EquationService()
    id1 = svc.store_equation("x+y*2")
    id2 = svc.store_equation("x + y * 2")
    id3 = svc.store_equation("x + (y * 2)")
    assert id1 == id2 == id3
    assert len(svc.get_all_equation_summaries()) == 1
    assert svc.evaluate_equation(id1, {"x": 5, "y": 3}) == 11.0


def test_distinct_expressions_get_distinct_ids() -> None:
    svc = EquationService()
    id1 = svc.store_equation("2+3*4")
    id2 = svc.store_equation("(2+3)*4")
    id3 = svc.store_equation("a+b")
    id4 = svc.store_equation("b+a")
    assert len({id1, id2, id3, id4}) == 4
    assert svc.evaluate_equation(id1, {}) == 14.0
    assert svc.evaluate_equation(id2, {}) == 20.0


def test_summaries_keep_first_spelling() -> None:
    svc = EquationService()
    svc.store_equation("(12/3)*4")
    svc.store_equation("12 / 3 * 4")
    [summary] = svc.get_all_equation_summaries()
    assert summary.infix == "(12/3)*4"


@pytest.mark.parametrize("infix", [None, "", "   "])
def test_store_rejects_blank(infix) -> None:
    with pytest.raises(CallerArgumentError):
        EquationService().store_equation(infix)


def test_store_rejects_bad_syntax_without_storing() -> None:
    svc = EquationService()
    with pytest.raises(EquationSyntaxError):
        svc.store_equation("3 * @ 2")
    with pytest.raises(EquationSyntaxError):
        svc.store_equation("(3 + 2")
    assert svc.get_all_equations() == []


def test_evaluate_errors() -> None:
    svc = EquationService()
    eid = svc.store_equation("x / y + z")
    with pytest.raises(MissingVariableError) as excinfo:
        svc.evaluate_equation(eid, {"x": 1, "y": 2})
    assert excinfo.value.variable_name == "z"
    with pytest.raises(DivisionByZeroError):
        svc.evaluate_equation(eid, {"x": 1, "y": 0, "z": 1})
    with pytest.raises(EquationNotFoundError) as missing:
        svc.evaluate_equation(eid + 100, {})
    assert missing.value.equation_id == eid + 100
    with pytest.raises(CallerArgumentError):
        svc.evaluate_equation(None, {})
    with pytest.raises(CallerArgumentError):
        svc.evaluate_equation(eid, None)


def test_concurrent_store_of_equivalent_expressions() -> None:
    svc = EquationService()
    spellings = ["a*b+c", "(a*b)+c", "a * b + c", "((a*b)+c)"] * 4
    barrier = threading.Barrier(len(spellings))
    ids: list[int] = []
    lock = threading.Lock()

    def worker(text: str) -> None:
        barrier.wait()
        eid = svc.store_equation(text)
        with lock:
            ids.append(eid)

    threads = [threading.Thread(target=worker, args=(s,)) for s in spellings]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(set(ids)) == 1
    assert len(svc.get_all_equations()) == 1


def test_long_chain_stores_dedups_and_evaluates() -> None:
    svc = EquationService()
    chain = "+".join(["x"] * 3000)
    eid = svc.store_equation(chain)
    assert svc.store_equation(f"({chain})") == eid
    assert svc.evaluate_equation(eid, {"x": 2}) == 6000.0
