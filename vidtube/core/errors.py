# vidtube/core/errors.py
"""
Error taxonomy shared by every service.

Services raise these; the handlers registered in main.py turn them into the
error envelope {statusCode, message, success: false}.

  InvalidArgument  400  malformed / missing input, bad id format
  Unauthenticated  401  no caller identity
  Forbidden        403  caller is not the owner
  NotFound         404  referenced entity absent
  InternalError    500  unexpected persistence result
  UploadFailure    500  media store returned nothing usable
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidArgument(ApiError):
    status_code = 400
    default_message = "Invalid request"


class Unauthenticated(ApiError):
    status_code = 401
    default_message = "User not authenticated"


class Forbidden(ApiError):
    status_code = 403
    default_message = "You are not allowed to modify this resource"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


class InternalError(ApiError):
    status_code = 500


class UploadFailure(InternalError):
    default_message = "Failed to upload file to the media store"


def error_body(status_code: int, message: str) -> dict:
    return {"statusCode": status_code, "message": message, "success": False}


# ── Handlers ───────────────────────────────────────────────
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(error_body(exc.status_code, exc.message), status_code=exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        error_body(exc.status_code, str(exc.detail)),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    message = "; ".join(parts) or "Invalid request"
    return JSONResponse(error_body(400, message), status_code=400)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
