"""
Maps service error kinds to HTTP responses.

This is the only place that turns a BlogError into a status code. Every
error is logged with the client's address before the response is sent.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from myblog.core.exceptions import BlogError, NotFoundError, StorageError, ValidationError

logger = logging.getLogger("fastapi")

STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def remote_address(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return f"{request.client.host}:{request.client.port}"


def log_error(request: Request, message: str, *args) -> None:
    logger.error("[%s] - " + message, remote_address(request), *args)


def status_for(exc: BlogError) -> int:
    for kind, code in STATUS_CODES.items():
        if isinstance(exc, kind):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    code = status_for(exc)
    if exc.original_error is not None:
        log_error(request, "%s %s: %s (%r)", request.method, request.url.path, exc.message, exc.original_error)
    else:
        log_error(request, "%s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=code, content={"detail": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log_error(request, "unable to parse request %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
