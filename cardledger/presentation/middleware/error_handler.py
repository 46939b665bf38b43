"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from cardledger.domain.exceptions import (
    DomainException,
    ValidationException,
    AuthenticationException,
    AuthorizationException,
    CreditCardExpenseConflictException,
    StorageException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

HTTP_ERROR_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def _error_response(status_code: int, exc: DomainException) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={**exc.to_dict(), "request_id": get_request_id()},
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid request"


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed bodies as 400 like other validation failures."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "VALIDATION_ERROR",
                "message": _describe_validation_errors(exc),
                "request_id": get_request_id(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Render routing errors in the common error body."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
                "message": str(exc.detail),
                "request_id": get_request_id(),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(ValidationException)
    async def validation_handler(
        request: Request,
        exc: ValidationException,
    ) -> JSONResponse:
        """Handle invalid request errors."""
        return _error_response(400, exc)

    @app.exception_handler(AuthenticationException)
    async def authentication_handler(
        request: Request,
        exc: AuthenticationException,
    ) -> JSONResponse:
        return _error_response(401, exc)

    @app.exception_handler(AuthorizationException)
    async def authorization_handler(
        request: Request,
        exc: AuthorizationException,
    ) -> JSONResponse:
        """Handle missing privileges and card ownership mismatches."""
        return _error_response(403, exc)

    @app.exception_handler(CreditCardExpenseConflictException)
    async def credit_card_expense_conflict_handler(
        request: Request,
        exc: CreditCardExpenseConflictException,
    ) -> JSONResponse:
        logger.warning(
            "credit_card_expense_conflict",
            request_id=get_request_id(),
            card_id=exc.credit_card_id,
        )
        return _error_response(409, exc)

    @app.exception_handler(StorageException)
    async def storage_handler(
        request: Request,
        exc: StorageException,
    ) -> JSONResponse:
        """Handle persistence failures."""
        logger.error(
            "storage_error",
            request_id=get_request_id(),
            message=exc.message,
            details=exc.details,
        )
        return _error_response(500, exc)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "request_id": get_request_id(),
            },
        )
