"""Map domain and transport errors to the ``ErrorResponse`` body."""

from http import HTTPStatus
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.v1.schemas.common import ErrorResponse
from core.config import settings
from core.exceptions import (
    AppException,
    CounterOverflowError,
    ErrorCode,
    HandleTakenError,
)
from domain.constants import U32_MAX

logger = structlog.get_logger()


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    body = ErrorResponse(error_code=error_code, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _details_for(exc: AppException) -> Any:
    """Attach what a client needs to recover from a conflict."""
    if isinstance(exc, HandleTakenError):
        namespace = exc.details["namespace"]
        handle = exc.details["handle"]
        return {**exc.details, "resolve": f"/api/v1/names/{namespace}/{handle}"}
    if isinstance(exc, CounterOverflowError):
        return {**exc.details, "max_index": U32_MAX}
    return exc.details


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        details = _details_for(exc)
        log = logger.info if exc.status_code in (401, 404) else logger.warning
        log(
            "request_rejected",
            error_code=exc.error_code.value,
            status_code=exc.status_code,
            details=details,
            request_id=_request_id(request),
        )
        return error_response(exc.status_code, exc.error_code.value, exc.message, details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Unknown routes and methods, in the same body shape as domain errors."""
        try:
            code = HTTPStatus(exc.status_code).name
        except ValueError:
            code = "HTTP_ERROR"
        return error_response(exc.status_code, code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        logger.info("request_invalid", error_count=len(errors))
        return error_response(
            422,
            ErrorCode.VALIDATION_ERROR.value,
            "Request validation failed",
            [
                {
                    "location": str(error["loc"][0]) if error["loc"] else None,
                    "field": ".".join(str(x) for x in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
                for error in errors
            ],
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """The record store is unreachable or refused the transaction."""
        request_id = _request_id(request)
        logger.error(
            "store_unavailable",
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        return error_response(
            503,
            ErrorCode.DATABASE_ERROR.value,
            "Record store unavailable",
            {"request_id": request_id},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Internals are hidden in production."""
        request_id = _request_id(request)
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        message = str(exc) if not settings.is_production else "An unexpected error occurred"
        return error_response(
            500,
            ErrorCode.INTERNAL_ERROR.value,
            message,
            {"request_id": request_id},
        )
