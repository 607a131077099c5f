"""
Global exception handler for the LandHud Lead List API.
Renders every failure as a {success: false, error, kind} envelope.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from .exceptions import (
    AuthenticationError,
    NotFoundError,
    PersistenceError,
    StorageException,
    ValidationError
)


def error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    """Build the failure envelope shared by all handlers."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "kind": kind}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return error_response(400, "validation_error", exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        fields = []
        for error in exc.errors():
            location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "header")]
            fields.append(".".join(location) or error.get("msg", "request"))
        return error_response(400, "validation_error", f"Invalid request: {', '.join(fields)}")

    @app.exception_handler(AuthenticationError)
    async def handle_auth_error(request: Request, exc: AuthenticationError):
        return error_response(401, "unauthorized", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        return error_response(500, "persistence_error", exc.message)

    @app.exception_handler(StorageException)
    async def handle_storage_error(request: Request, exc: StorageException):
        return error_response(500, "storage_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_generic_error(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"Unhandled error on {request.url.path}")
        return error_response(500, "internal_error", "An unexpected error occurred")
