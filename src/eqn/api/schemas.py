from __future__ import annotations

import math

from pydantic import BaseModel, field_serializer, field_validator

from eqn.service import EquationDto, EquationSummaryDto

__all__ = [
    "EquationDto",
    "EquationSummaryDto",
    "EvaluateEquationRequest",
    "EvaluateEquationResponse",
    "StoreEquationRequest",
    "StoreEquationResponse",
    "json_number",
]


def json_number(value: float) -> float | str:
    """Non-finite floats have no JSON literal; render them as strings."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


class StoreEquationRequest(BaseModel):
    equation: str

    @field_validator("equation")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Equation cannot be blank")
        return value


class StoreEquationResponse(BaseModel):
    id: int


class EvaluateEquationRequest(BaseModel):
    variables: dict[str, float]

    @field_validator("variables")
    @classmethod
    def _not_empty(cls, value: dict[str, float]) -> dict[str, float]:
        if not value:
            raise ValueError("Variables map cannot be empty")
        return value


class EvaluateEquationResponse(BaseModel):
    result: float

    @field_serializer("result")
    def _json_result(self, value: float) -> float | str:
        return json_number(value)
