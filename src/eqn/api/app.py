from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from flask import Flask, jsonify, request
from pydantic import BaseModel, ValidationError
from werkzeug.exceptions import HTTPException

from eqn.api.schemas import (
    EvaluateEquationRequest,
    EvaluateEquationResponse,
    StoreEquationRequest,
    StoreEquationResponse,
)
from eqn.errors import (
    CallerArgumentError,
    DivisionByZeroError,
    EquationNotFoundError,
    EquationSyntaxError,
    MissingVariableError,
)
from eqn.service import EquationService

logger = logging.getLogger(__name__)


class _RequestBodyError(Exception):
    def __init__(self, status: int, error: str, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.status = status
        self.error = error
        self.message = message
        self.extra = extra


def _error_body(status: int, error: str, message: str, **extra: Any):
    payload: dict[str, Any] = {
        "timestamp": datetime.now().isoformat(),
        "status": status,
        "error": error,
        "message": message,
    }
    payload.update(extra)
    return jsonify(payload), status


def _field_errors(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "body"
        errors[field] = str(err.get("msg", "")).removeprefix("Value error, ")
    return errors


def _read_body(model: type[BaseModel]) -> Any:
    if not request.is_json:
        content_type = request.content_type or "unknown"
        raise _RequestBodyError(
            415,
            "Unsupported Media Type",
            f"Content-Type '{content_type}' is not supported. Expected 'application/json'",
            supportedMediaTypes=["application/json"],
        )
    data = request.get_json(silent=True)
    if data is None:
        raise _RequestBodyError(400, "Malformed JSON", "Request body contains invalid JSON")
    return model.model_validate(data)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(_RequestBodyError)
    def _body_error(exc: _RequestBodyError):
        return _error_body(exc.status, exc.error, exc.message, **exc.extra)

    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return _error_body(400, "Validation Failed", "Input validation failed", fieldErrors=_field_errors(exc))

    @app.errorhandler(EquationSyntaxError)
    def _syntax_error(exc: EquationSyntaxError):
        logger.info("rejected equation reason=%s", exc.message)
        return _error_body(400, "Invalid Equation Syntax", exc.message)

    @app.errorhandler(MissingVariableError)
    def _missing_variable(exc: MissingVariableError):
        return _error_body(400, "Missing Variable", exc.message, missingVariable=exc.variable_name)

    @app.errorhandler(DivisionByZeroError)
    def _division_by_zero(exc: DivisionByZeroError):
        return _error_body(400, "Arithmetic Error", exc.message)

    @app.errorhandler(EquationNotFoundError)
    def _not_found(exc: EquationNotFoundError):
        return _error_body(404, "Equation Not Found", exc.message)

    @app.errorhandler(CallerArgumentError)
    def _caller_argument(exc: CallerArgumentError):
        return _error_body(400, "Invalid Argument", exc.message)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return _error_body(exc.code or 500, exc.name, exc.description or exc.name)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        logger.exception("unhandled error path=%s", request.path)
        return _error_body(500, "Internal Server Error", "An unexpected error occurred")


def create_app(service: EquationService | None = None) -> Flask:
    app = Flask(__name__)
    svc = service if service is not None else EquationService()
    app.extensions["equation_service"] = svc

    @app.post("/api/equations/store")
    def store_equation():
        body = _read_body(StoreEquationRequest)
        equation_id = svc.store_equation(body.equation)
        return jsonify(StoreEquationResponse(id=equation_id).model_dump()), 201

    @app.get("/api/equations")
    def list_equations():
        return jsonify([s.model_dump() for s in svc.get_all_equation_summaries()])

    @app.post("/api/equations/<int:equation_id>/evaluate")
    def evaluate_equation(equation_id: int):
        body = _read_body(EvaluateEquationRequest)
        result = svc.evaluate_equation(equation_id, body.variables)
        return jsonify(EvaluateEquationResponse(result=result).model_dump())

    @app.get("/health")
    def health():
        return jsonify({"status": "UP"})

    _register_error_handlers(app)
    return app
