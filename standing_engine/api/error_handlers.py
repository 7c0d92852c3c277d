"""
API error rendering

Every error response uses the same envelope:
    {"error": {"code": ..., "message": ..., "details": ...}}

Engine errors map onto HTTP status by category; anything else is a 500.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from standing_engine.services.errors import (
    AcademicEngineError,
    ConflictError,
    NotFoundError,
    PreconditionFailedError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

# Error category -> HTTP status, checked in order
ERROR_STATUS_CODES = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (PreconditionFailedError, status.HTTP_412_PRECONDITION_FAILED),
    (ValidationFailedError, status.HTTP_422_UNPROCESSABLE_ENTITY),
)


def status_code_for(exc: AcademicEngineError) -> int:
    """Map an engine error onto its HTTP status code"""
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_response(status_code: int, code: str, message: str, details: Optional[Any] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, "details": details}},
    )


def validation_details(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Pydantic error list without the ctx entries, which may hold exception objects"""
    return [{key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()]


async def academic_engine_error_handler(request: Request, exc: AcademicEngineError) -> JSONResponse:
    """Render engine errors with their category status and identifiers"""
    status_code = status_code_for(exc)
    logger.info(f"{request.method} {request.url.path} rejected with {status_code}: {exc.code} - {exc.message}")
    return error_response(status_code, exc.code, exc.message, exc.context or None)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        validation_details(exc),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An internal server error occurred",
        str(exc) if request.app.debug else None,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AcademicEngineError, academic_engine_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
