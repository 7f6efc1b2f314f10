from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger("outreach.errors")


class NotFoundError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidRequestError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class StorageUnavailableError(HTTPException):
    def __init__(self, detail: str = "database connection not available") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(error: dict[str, Any]) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in {"body", "query", "path"}]
    message = str(error.get("msg", "invalid value"))
    if not location:
        return message
    return f"{'.'.join(location)}: {message}"


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [_describe_validation_error(error) for error in exc.errors()]
    return error_response(status.HTTP_400_BAD_REQUEST, "; ".join(messages) or "invalid request")


async def _storage_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("storage.unavailable", extra={"path": request.url.path, "error": str(exc)})
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "database connection not available")


async def _missing_driver_handler(request: Request, exc: ModuleNotFoundError) -> JSONResponse:
    logger.error("storage.driver_missing", extra={"path": request.url.path, "error": str(exc)})
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, f"database driver not installed: {exc.name}")


async def _unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unexpected.error", extra={"path": request.url.path, "error": str(exc)})
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or exc.__class__.__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(OperationalError, _storage_exception_handler)
    app.add_exception_handler(InterfaceError, _storage_exception_handler)
    app.add_exception_handler(ModuleNotFoundError, _missing_driver_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unexpected_exception_handler)
