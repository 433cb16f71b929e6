from __future__ import annotations

import itertools
import threading

from pydantic import BaseModel, ConfigDict, Field

from eqn.dsl.tokens import Token
from eqn.errors import CallerArgumentError


class EquationEntity(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    infix: str
    postfix: list[Token] = Field(default_factory=list)
    ast_hash: str


class InMemoryEquationRepository:
    """Append-only equation store keyed by id, with a secondary index on ast_hash.

    Ids start at 1 and are never reused, including after ``clear()``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._by_id: dict[int, EquationEntity] = {}
        self._by_hash: dict[str, int] = {}

    def _insert_locked(self, infix: str, postfix: list[Token], ast_hash: str) -> EquationEntity:
        entity = EquationEntity(id=next(self._ids), infix=infix, postfix=list(postfix), ast_hash=ast_hash)
        self._by_id[entity.id] = entity
        self._by_hash.setdefault(ast_hash, entity.id)
        return entity

    def insert(self, infix: str, postfix: list[Token], ast_hash: str) -> int:
        with self._lock:
            return self._insert_locked(infix, postfix, ast_hash).id

    def insert_if_absent(self, infix: str, postfix: list[Token], ast_hash: str) -> tuple[EquationEntity, bool]:
        with self._lock:
            existing_id = self._by_hash.get(ast_hash)
            if existing_id is not None:
                return self._by_id[existing_id], False
            return self._insert_locked(infix, postfix, ast_hash), True

    def find_by_hash(self, ast_hash: str) -> EquationEntity | None:
        with self._lock:
            existing_id = self._by_hash.get(ast_hash)
            return None if existing_id is None else self._by_id[existing_id]

    def find_by_id(self, equation_id: int | None) -> EquationEntity | None:
        if equation_id is None:
            raise CallerArgumentError("ID cannot be null")
        with self._lock:
            return self._by_id.get(equation_id)

    def list_all(self) -> list[EquationEntity]:
        with self._lock:
            return [self._by_id[k] for k in sorted(self._by_id)]

    def size(self) -> int:
        with self._lock:
            return len(self._by_id)

    def clear(self) -> None:
        with self._lock:
            self._by_id.clear()
            self._by_hash.clear()
