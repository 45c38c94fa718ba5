"""
Handlers turning expected errors into ``{message}`` JSON responses.

- ``GalleryError`` subclasses raised by services: their own status code
- ``HTTPException`` (routing 404/405 and explicit raises): their status code
- request validation failures: 400 with the individual ``errors``
"""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from talanta_gallery.core.errors import GalleryError
from talanta_gallery.core.logging_config import get_logger

logger = get_logger(__name__)


async def gallery_error_handler(request: Request, exc: GalleryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    else:
        logger.debug(f"{exc.status_code} {type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message, **exc.details})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors(), exclude={"ctx", "input", "url"})
    logger.debug(f"Validation failed for {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"message": "Validation failed", "errors": errors})
