"""Map domain errors onto HTTP responses."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import InvalidTransition, NotFound, ValidationFailure, ValidationIssue
from schemas.responses import ErrorDetail, ErrorResponse
from schemas.validation import ValidationOutcome

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    message: str,
    issues: Iterable[ValidationIssue] = (),
    **extra: Any,
) -> JSONResponse:
    body = ErrorResponse(
        error=message,
        details=[ErrorDetail(path=issue.path, message=issue.message) for issue in issues],
    )
    return JSONResponse(status_code=status_code, content={**body.model_dump(), **extra})


def validation_response(message: str, outcome: ValidationOutcome) -> JSONResponse:
    return error_response(400, message, outcome.issues)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationFailure)
    async def _validation_failure(request: Request, exc: ValidationFailure) -> JSONResponse:
        return error_response(400, exc.message, exc.issues)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        issues = [
            ValidationIssue(
                path=".".join(str(part) for part in error.get("loc", ())),
                message=error.get("msg", "Invalid value"),
            )
            for error in exc.errors()
        ]
        return error_response(400, "Invalid request", issues)

    @app.exception_handler(NotFound)
    async def _not_found(request: Request, exc: NotFound) -> JSONResponse:
        return error_response(404, str(exc))

    @app.exception_handler(InvalidTransition)
    async def _invalid_transition(request: Request, exc: InvalidTransition) -> JSONResponse:
        logger.info("Rejected transition: %s", exc)
        return error_response(409, str(exc), status=exc.current)
