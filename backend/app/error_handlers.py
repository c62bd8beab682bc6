"""
Custom exception handlers for FastAPI.

- Issue errors keep the legacy body shape ``{"id"?, "error"}``. Their status
  is 200 unless ERROR_STATUS_CODES is enabled (400 validation / 404 not found).
- Request IDs are logged server-side for tracing but NOT exposed in bodies.
- Generic error messages for 500 errors to prevent information disclosure.
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from issue_tracker.exceptions import IssueNotFoundError, IssueTrackerError
from issue_tracker.logging import get_context_value, get_logger

logger = get_logger("backend.errors")


def _response_payload(detail: str, status_code: int) -> dict:
    """Create error response payload for non-domain errors."""
    return {
        "detail": detail,
        "status_code": status_code,
    }


def issue_error_status(exc: IssueTrackerError, use_status_codes: bool) -> int:
    """Pick the HTTP status for a domain error."""
    if not use_status_codes:
        return status.HTTP_200_OK
    if isinstance(exc, IssueNotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(IssueTrackerError)
    async def issue_error_handler(request: Request, exc: IssueTrackerError):
        settings = request.app.state.settings
        status_code = issue_error_status(exc, settings.error_status_codes)
        logger.info(
            "issue_request_rejected",
            error=exc.message,
            issue_id=exc.issue_id,
            status_code=status_code,
            request_id=get_context_value("request_id"),
        )
        return JSONResponse(status_code=status_code, content=exc.to_body())

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=get_context_value("request_id"),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
        )

    @app.exception_handler(RequestValidationError)
    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc):
        errors = exc.errors()
        logger.warning(
            "validation_error",
            errors=errors,
            request_id=get_context_value("request_id"),
        )
        return JSONResponse(
            status_code=422,
            content={
                **_response_payload("Validation error", 422),
                "errors": [
                    {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                    for err in errors
                ],
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        # Log full details server-side (including request_id for tracing)
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=get_context_value("request_id"),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_response_payload("Internal server error", 500),
        )
