from __future__ import annotations

import logging
from typing import Mapping

from pydantic import BaseModel

from eqn.dsl.lexer import tokenize
from eqn.dsl.postfix import to_postfix
from eqn.dsl.tokens import Token, token_types
from eqn.dsl.tree import parse
from eqn.errors import CallerArgumentError, EquationNotFoundError
from eqn.interp.core import evaluate
from eqn.morph.equiv import generate_hash
from eqn.store.memory import EquationEntity, InMemoryEquationRepository

logger = logging.getLogger(__name__)


class EquationDto(BaseModel):
    id: int
    infix: str
    postfix: list[Token]


class EquationSummaryDto(BaseModel):
    id: int
    infix: str


class EquationService:
    """Stores expressions once per structural hash and evaluates them by id."""

    def __init__(self, repository: InMemoryEquationRepository | None = None) -> None:
        self.repository = repository if repository is not None else InMemoryEquationRepository()

    def store_equation(self, infix: str | None) -> int:
        if infix is None or not infix.strip():
            raise CallerArgumentError("Infix expression cannot be null or empty")
        trimmed = infix.strip()
        ast_hash = generate_hash(parse(trimmed))
        existing = self.repository.find_by_hash(ast_hash)
        if existing is not None:
            logger.debug("store dedup id=%d hash=%s", existing.id, ast_hash)
            return existing.id
        postfix_types = token_types(to_postfix(tokenize(trimmed)))
        # A concurrent caller may have stored the same hash since the lookup.
        entity, created = self.repository.insert_if_absent(trimmed, postfix_types, ast_hash)
        logger.debug("store id=%d created=%s hash=%s", entity.id, str(created).lower(), ast_hash)
        return entity.id

    def get_all_equations(self) -> list[EquationDto]:
        return [self._to_dto(e) for e in self.repository.list_all()]

    def get_all_equation_summaries(self) -> list[EquationSummaryDto]:
        return [EquationSummaryDto(id=e.id, infix=e.infix) for e in self.repository.list_all()]

    def evaluate_equation(self, equation_id: int | None, variables: Mapping[str, float] | None) -> float:
        if equation_id is None:
            raise CallerArgumentError("Equation ID cannot be null")
        if variables is None:
            raise CallerArgumentError("Variables map cannot be null")
        entity = self.repository.find_by_id(equation_id)
        if entity is None:
            raise EquationNotFoundError(equation_id)
        result = evaluate(parse(entity.infix), variables)
        logger.debug("evaluate id=%d vars=%d result=%s", equation_id, len(variables), result)
        return result

    @staticmethod
    def _to_dto(entity: EquationEntity) -> EquationDto:
        return EquationDto(id=entity.id, infix=entity.infix, postfix=entity.postfix)
