"""Service error taxonomy and the JSON error handler."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class ServiceError(Exception):
    """Base class for failures scoped to a single request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An error occurred"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Unauthorized(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized"


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class PersistenceError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to save changes"


class UpstreamError(ServiceError):
    """Raised when the AI gateway fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "AI service temporarily unavailable"


class RateLimited(UpstreamError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Rate limit exceeded. Please try again in a moment."


class QuotaExhausted(UpstreamError):
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_message = "AI credits exhausted. Please add credits to continue."


class UpstreamUnavailable(UpstreamError):
    pass


async def service_error_handler(_: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    """Render every ServiceError as ``{"error": message}``."""
    app.add_exception_handler(ServiceError, service_error_handler)
