"""
Application exceptions and the HTTP status each one maps to.
"""
from fastapi import status
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base class for errors that are reported to the client as {"error": message}."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(AppError):
    """A required server secret is missing."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamUnavailableError(AppError):
    """Every model backend failed or returned nothing."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class PersistenceError(AppError):
    """The history table could not be written."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON error body used by every endpoint."""
    return JSONResponse(status_code=status_code, content={"error": message})
