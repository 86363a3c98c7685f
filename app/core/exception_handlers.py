"""Exception-to-response mapping for the FastAPI app.

Every error body has the shape {"error", "message", ["details"], "request_id"}
so Strapi webhook logs and operator tooling can quote the request ID back.
Register once with register_exception_handlers(app).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import (
    AuthenticationException,
    CmsUnavailableException,
    InvalidWebhookPayloadException,
    ResourceNotFoundException,
    SagenaException,
)
from app.shared.context import get_request_id

logger = logging.getLogger(__name__)

_STATUS_BY_EXCEPTION: dict[type[SagenaException], int] = {
    AuthenticationException: 401,
    InvalidWebhookPayloadException: 400,
    ResourceNotFoundException: 404,
    CmsUnavailableException: 502,
}


def _status_for(exc: SagenaException) -> int:
    for exc_type in type(exc).__mro__:
        status = _STATUS_BY_EXCEPTION.get(exc_type)
        if status is not None:
            return status
    return 400


def _error_response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> JSONResponse:
    request_id = get_request_id()
    if request_id:
        body["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _sagena_exception_handler(request: Request, exc: SagenaException) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.error("%s on %s: %s %s", exc.error_code, request.url.path, exc.message, exc.details)
    return _error_response(status, exc.to_dict())


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(
        422,
        {
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(
        exc.status_code,
        {"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is exposed only with DEBUG on."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(500, {"error": "INTERNAL_ERROR", "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SagenaException, _sagena_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
