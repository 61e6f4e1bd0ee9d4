"""Domain errors raised by the service layer."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class EnergyDashError(Exception):
    """Base class for domain errors."""


class ValidationError(EnergyDashError):
    """Input could not be parsed or violates a domain rule."""


class PersistenceError(EnergyDashError):
    """A storage operation (query, delete, insert, commit) failed."""


async def _validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


async def _persistence_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Driver messages carry SQL and parameters; keep them in the log only
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage operation failed"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses."""
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(PersistenceError, _persistence_error_handler)
