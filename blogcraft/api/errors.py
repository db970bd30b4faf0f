from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from blogcraft.core.errors import AppError, AuthenticationError
from blogcraft.core.logging import get_logger

logger = get_logger(__name__)


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Human readable summary, e.g. ``userId: Field required``"""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Application errors become ``{error}`` with their status code"""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Missing or malformed identifiers are client errors, reported as 400
    message = describe_validation_errors(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "detail": jsonable_encoder(exc.errors(), custom_encoder={Exception: str})},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the application-wide exception handlers"""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
