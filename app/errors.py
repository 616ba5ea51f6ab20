"""
Error taxonomy for the Product API and its translation to HTTP responses.

Core code (validator, store, query engine, auth gate) raises the
exceptions defined here.  ``register_exception_handlers`` installs the
FastAPI handlers that turn them into JSON bodies with the right status
code; nothing below the handler layer knows about HTTP responses.
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ProductAPIError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


class ValidationError(ProductAPIError):
    """Client payload or query is malformed; carries every violation found."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation Error"

    def __init__(self, details: List[str], message: Optional[str] = None):
        super().__init__(message or "Validation failed")
        self.details = list(details)

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["details"] = self.details
        return body


class NotFoundError(ProductAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class AuthError(ProductAPIError):
    pass


class MissingCredentialError(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class InvalidCredentialError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"


class InternalError(ProductAPIError):
    pass


async def product_api_error_handler(request: Request, exc: ProductAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # FastAPI rejects non-object or malformed JSON bodies before our validator runs.
    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        details.append(f"{location}: {err.get('msg', 'invalid value')}")
    return await product_api_error_handler(request, ValidationError(details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Route not found",
                "message": f"The route {request.url.path} does not exist",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP Error", "message": str(exc.detail)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return await product_api_error_handler(
        request, InternalError(str(exc) or "Something went wrong")
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProductAPIError, product_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
