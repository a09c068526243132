"""Global error handlers ensuring request_id is included in JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from electivas.api.request_id import get_request_id
from electivas.domain import exceptions

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[exceptions.ReviewError], int], ...] = (
    (exceptions.BlockedIdentityError, status.HTTP_403_FORBIDDEN),
    (exceptions.ValidationError, status.HTTP_400_BAD_REQUEST),
    (exceptions.RateLimitError, status.HTTP_429_TOO_MANY_REQUESTS),
    (exceptions.DuplicateReportError, status.HTTP_409_CONFLICT),
    (exceptions.CommentNotFoundError, status.HTTP_404_NOT_FOUND),
    (exceptions.StoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: exceptions.ReviewError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
        rid = get_request_id(request)
        payload = {"detail": exc.detail, "request_id": rid}
        return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        rid = get_request_id(request)
        payload = {"detail": "validation_error", "errors": jsonable_errors(exc), "request_id": rid}
        return JSONResponse(status_code=422, content=payload)

    @app.exception_handler(exceptions.ReviewError)
    async def review_exc_handler(request: Request, exc: exceptions.ReviewError):  # type: ignore[override]
        rid = get_request_id(request)
        code = status_for(exc)
        if isinstance(exc, exceptions.StoreError):
            logger.error("store_error", extra={"reason": exc.reason, "path": request.url.path})
        return JSONResponse(status_code=code, content={"detail": exc.reason, "request_id": rid})


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for error in exc.errors():
        errors.append({"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")})
    return errors
