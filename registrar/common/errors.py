"""Error taxonomy surfaced to API callers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from registrar.common.schemas import ErrorResponse
from registrar.common.utils import current_timestamp

logger = logging.getLogger("api.errors")


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "conflict"


class BusinessRuleError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "business_rule_violation"


class InternalError(ApiError):
    pass


def _render(exc: ApiError) -> JSONResponse:
    body = ErrorResponse(
        error_code=exc.error_code,
        message=exc.message,
        details=exc.details,
        timestamp=current_timestamp(),
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("api_error path=%s code=%s message=%s", request.url.path, exc.error_code, exc.message)
    return _render(exc)


async def _integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("integrity_error path=%s detail=%s", request.url.path, exc.orig)
    return _render(ConflictError("Request conflicts with existing data"))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error path=%s", request.url.path)
    return _render(InternalError("Something went wrong"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(IntegrityError, _integrity_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
