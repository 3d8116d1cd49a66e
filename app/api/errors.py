"""Map domain errors raised by services onto JSON error responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.core.errors import (
    CodeBrosError,
    DuplicateConnectionError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[CodeBrosError], int] = {
    NotFoundError: 404,
    DuplicateConnectionError: 400,
    ValidationError: 400,
    InvalidStateError: 409,
}


def status_for(exc: CodeBrosError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 400


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CodeBrosError)
    async def domain_exc_handler(request: Request, exc: CodeBrosError):
        status_code = status_for(exc)
        logger.info(f"{request.method} {request.url.path} rejected ({status_code}): {exc}")
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})
