"""Exception handlers for the FastAPI application."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.v1.schemas.common import ErrorResponse, FieldError
from core.exceptions import AppException, ErrorCode, ValidationError

logger = structlog.get_logger()

INTERNAL_ERROR_MESSAGE = "Internal server error."
VALIDATION_MESSAGE = "Request validation failed"


def _field_path(loc: tuple) -> str:
    """``("body", "social", "twitter")`` -> ``"social.twitter"``."""
    return ".".join(str(part) for part in loc if part not in ("body", "query", "path"))


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Known failures: the status code and message come from the exception."""
        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
            status_code=exc.status_code,
        )
        response = ErrorResponse(
            error_code=exc.error_code.value,
            msg=exc.message,
            details=exc.details,
        )
        if isinstance(exc, ValidationError):
            response.errors = [FieldError(**error) for error in exc.details]
        return JSONResponse(status_code=exc.status_code, content=response.body())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Routing errors (unknown path, wrong method) in the common shape."""
        response = ErrorResponse(error_code="HTTP_ERROR", msg=str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content=response.body(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed bodies, paths and queries are reported as 400."""
        errors = [
            FieldError(field=_field_path(error["loc"]), msg=error["msg"], type=error["type"])
            for error in exc.errors()
        ]
        logger.info("validation_error", fields=[e.field for e in errors])
        response = ErrorResponse(
            error_code=ErrorCode.VALIDATION_ERROR.value,
            msg=VALIDATION_MESSAGE,
            errors=errors,
        )
        return JSONResponse(status_code=400, content=response.body())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Anything else is logged with its traceback; the client gets a generic message."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        response = ErrorResponse(
            error_code=ErrorCode.INTERNAL_ERROR.value,
            msg=INTERNAL_ERROR_MESSAGE,
            details={"request_id": request_id},
        )
        return JSONResponse(status_code=500, content=response.body())
