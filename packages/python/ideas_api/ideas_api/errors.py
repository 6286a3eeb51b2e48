"""Map repository errors onto HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from ideas_repo import DuplicateTitleError, IdeaNotFoundError, InvalidIdeaError


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def _handle_not_found(request: Request, exc: IdeaNotFoundError) -> JSONResponse:
    logger.warning("{method} {path} -> 404: {error}", method=request.method, path=request.url.path, error=exc)
    return _error_response(404, "Idea not found")


async def _handle_bad_request(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("{method} {path} -> 400: {error}", method=request.method, path=request.url.path, error=exc)
    return _error_response(400, str(exc))


async def _handle_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_error(exc)
    logger.warning("{method} {path} -> 400: {error}", method=request.method, path=request.url.path, error=message)
    return _error_response(400, message)


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(
        "{method} {path} failed", method=request.method, path=request.url.path
    )
    return _error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the ideas error mapping to ``app``."""

    app.add_exception_handler(IdeaNotFoundError, _handle_not_found)
    app.add_exception_handler(DuplicateTitleError, _handle_bad_request)
    app.add_exception_handler(InvalidIdeaError, _handle_bad_request)
    app.add_exception_handler(RequestValidationError, _handle_validation)
    app.add_exception_handler(Exception, _handle_unexpected)
