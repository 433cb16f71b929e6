from __future__ import annotations

import threading

import pytest
from pydantic import ValidationError

from eqn.dsl.tokens import Token
from eqn.errors import CallerArgumentError
from eqn.store.memory import InMemoryEquationRepository

_POSTFIX = [Token.VARIABLE, Token.VARIABLE, Token.OPERATOR]


def test_insert_assigns_monotonic_ids() -> None:
    repo = InMemoryEquationRepository()
    assert repo.insert("a+b", _POSTFIX, "(a+b)") == 1
    assert repo.insert("x+y", _POSTFIX, "(x+y)") == 2
    assert repo.size() == 2


def test_find_by_hash_and_id() -> None:
    repo = InMemoryEquationRepository()
    eid = repo.insert("a + b", _POSTFIX, "(a+b)")
    found = repo.find_by_hash("(a+b)")
    assert found is not None
    assert found.id == eid
    assert found.infix == "a + b"
    assert found.postfix == _POSTFIX
    assert repo.find_by_id(eid) == found
    assert repo.find_by_hash("(b+a)") is None
    assert repo.find_by_id(99) is None


def test_find_by_id_rejects_none() -> None:
    with pytest.raises(CallerArgumentError):
        InMemoryEquationRepository().find_by_id(None)


def test_insert_if_absent_keeps_first_writer() -> None:
    repo = InMemoryEquationRepository()
    first, created = repo.insert_if_absent("a+b", _POSTFIX, "(a+b)")
    assert created
    second, created_again = repo.insert_if_absent("(a)+b", _POSTFIX, "(a+b)")
    assert not created_again
    assert second == first
    assert second.infix == "a+b"


def test_entities_are_frozen() -> None:
    repo = InMemoryEquationRepository()
    entity, _ = repo.insert_if_absent("a+b", _POSTFIX, "(a+b)")
    with pytest.raises(ValidationError):
        entity.infix = "changed"  # type: ignore[misc]


def test_clear_does_not_reuse_ids() -> None:
    repo = InMemoryEquationRepository()
    repo.insert("a", [Token.VARIABLE], "a")
    repo.clear()
    assert repo.list_all() == []
    assert repo.insert("b", [Token.VARIABLE], "b") == 2


def test_list_all_ordered_by_id() -> None:
    repo = InMemoryEquationRepository()
    for name in ["c", "a", "b"]:
        repo.insert(name, [Token.VARIABLE], name)
    assert [e.infix for e in repo.list_all()] == ["c", "a", "b"]


def test_concurrent_insert_if_absent_creates_one_entity() -> None:
    repo = InMemoryEquationRepository()
    barrier = threading.Barrier(8)
    ids: list[int] = []
    lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        entity, _ = repo.insert_if_absent("a+b", _POSTFIX, "(a+b)")
        with lock:
            ids.append(entity.id)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert repo.size() == 1
    assert set(ids) == {1}
