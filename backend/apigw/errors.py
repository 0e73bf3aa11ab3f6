"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module fournit la taxonomie d'erreurs de l'application (validation, authentification, route
inconnue, limitation de débit, erreur serveur) et les handlers FastAPI qui les convertissent en
enveloppe JSON `{"error": ..., "code": ...}`. Le détail des erreurs inattendues n'est jamais renvoyé
au client: il est uniquement journalisé côté serveur.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route not found"
SERVER_ERROR = "Something went wrong!"


# Common error codes
class ErrorCodes:
    """Standard error codes for the API."""

    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_STATUS_CODES = {
    400: ErrorCodes.BAD_REQUEST,
    401: ErrorCodes.UNAUTHORIZED,
    404: ErrorCodes.NOT_FOUND,
    405: ErrorCodes.METHOD_NOT_ALLOWED,
    429: ErrorCodes.RATE_LIMITED,
    500: ErrorCodes.INTERNAL_ERROR,
}


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    error: str
    code: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None


class APIError(HTTPException):
    """Custom API error with standard envelope."""

    status_code_default = 500
    code_default = ErrorCodes.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize an API error with standardized envelope."""
        super().__init__(
            status_code=status_code or self.status_code_default,
            detail=message,
            headers=headers,
        )
        self.code = code or self.code_default
        self.message = message
        self.details = details


class ValidationError(APIError):
    """Entrée mal formée (format, contrainte): 400."""

    status_code_default = 400
    code_default = ErrorCodes.VALIDATION_ERROR


class AuthError(APIError):
    """Jeton absent/invalide (401) ou identifiants refusés (400 via `invalid_credentials`)."""

    status_code_default = 401
    code_default = ErrorCodes.UNAUTHORIZED


class NotFoundError(APIError):
    """Ressource ou route inconnue: 404."""

    status_code_default = 404
    code_default = ErrorCodes.NOT_FOUND


class RateLimitedError(APIError):
    """Trop de requêtes: 429."""

    status_code_default = 429
    code_default = ErrorCodes.RATE_LIMITED


class ServerError(APIError):
    """Erreur inattendue, y compris les défaillances de persistance: 500."""

    status_code_default = 500
    code_default = ErrorCodes.INTERNAL_ERROR


def invalid_credentials() -> AuthError:
    """Identifiants refusés au login (400, message volontairement générique)."""
    return AuthError(
        "Invalid email or password", status_code=400, code=ErrorCodes.INVALID_CREDENTIALS
    )


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(error=message, code=code, trace_id=trace_id, details=details)
    content: dict[str, Any] = {"error": envelope.error, "code": envelope.code}
    if envelope.trace_id:
        content["trace_id"] = envelope.trace_id
    if envelope.details:
        content.update(envelope.details)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def extract_trace_id(request: Request) -> str | None:
    """Extract trace ID from request headers (request id propagé par le middleware)."""
    return request.headers.get("X-Trace-ID") or request.headers.get("X-Request-ID")


def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions with standard envelope."""
    trace_id = extract_trace_id(request)
    if exc.status_code >= 500:
        # La cause (ex. erreur Redis) est chaînée sur l'exception; le client ne voit que `message`.
        log.error(
            "Server error on %s: %s",
            request.url.path,
            exc.__cause__ or exc.message,
            extra={"code": exc.code, "trace_id": trace_id, "path": request.url.path},
            exc_info=exc,
        )
    else:
        log.warning(
            "API error occurred",
            extra={
                "code": exc.code,
                "error_message": exc.message,
                "status_code": exc.status_code,
                "trace_id": trace_id,
                "path": request.url.path,
            },
        )
    return create_error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        trace_id=trace_id,
        details=exc.details,
        headers=exc.headers,
    )


def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle Starlette/FastAPI HTTPException (routes inconnues, méthodes refusées)."""
    if exc.status_code == 404:
        return handle_api_error(request, NotFoundError(ROUTE_NOT_FOUND))
    return create_error_response(
        status_code=exc.status_code,
        code=_STATUS_CODES.get(exc.status_code, "HTTP_ERROR"),
        message=str(exc.detail),
        trace_id=extract_trace_id(request),
        headers=getattr(exc, "headers", None),
    )


def handle_validation_exception(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Convertit les erreurs de validation pydantic en 400 avec la liste des champs fautifs."""
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return create_error_response(
        status_code=400,
        code=ErrorCodes.VALIDATION_ERROR,
        message="Validation failed",
        trace_id=extract_trace_id(request),
        details={"errors": errors},
    )


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle generic exceptions with standard envelope."""
    trace_id = extract_trace_id(request)
    log.error(
        "Unexpected error occurred on %s: %s: %s",
        request.url.path,
        type(exc).__name__,
        exc,
        extra={
            "code": ErrorCodes.INTERNAL_ERROR,
            "trace_id": trace_id,
            "path": request.url.path,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=exc,
    )
    return create_error_response(
        status_code=500,
        code=ErrorCodes.INTERNAL_ERROR,
        message=SERVER_ERROR,
        trace_id=trace_id,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Enregistre les handlers d'erreurs sur l'application."""
    app.add_exception_handler(APIError, handle_api_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_exception)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_generic_exception)
