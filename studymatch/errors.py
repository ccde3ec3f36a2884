"""Domain errors raised by services and mapped to HTTP responses in main."""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class StudyMatchError(Exception):
    """Base exception for study match operations."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class Unauthenticated(StudyMatchError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotFound(StudyMatchError):
    status_code = 404


class Conflict(StudyMatchError):
    """Invalid state transition or duplicate write."""
    status_code = 400


class Forbidden(StudyMatchError):
    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class ValidationError(StudyMatchError):
    status_code = 400


async def study_match_exception_handler(request: Request, exc: StudyMatchError):
    logger.warning("%s: %s - Path: %s", exc.__class__.__name__, exc.message, request.url.path)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Malformed input - Path: %s", request.url.path)
    return JSONResponse(status_code=400, content={"detail": jsonable_errors(exc)})


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Store failures have no internal category; surface them as 400 with the driver message."""
    logger.error("Database error: %s - Path: %s", exc, request.url.path)
    return JSONResponse(status_code=400, content={"detail": str(exc.orig if getattr(exc, "orig", None) else exc)})


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
