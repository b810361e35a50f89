"""Module with the API utility functions."""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from humanly.api.data_models import ErrorResponse
from humanly.errors import HumanlyError, InternalError, ValidationError


def to_error_response(error: HumanlyError) -> JSONResponse:
    """
    Convert an application error to a JSON response.

    Args:
        error (HumanlyError): The error.

    Returns:
        JSONResponse: Response with the error's status code and public message.
    """
    body = ErrorResponse(error=error.public_message)
    if isinstance(error, ValidationError):
        body.limit = error.limit
    return JSONResponse(
        status_code=error.status_code, content=body.model_dump(exclude_none=True)
    )


async def handle_application_error(
    fastapi_request: Request, error: HumanlyError
) -> JSONResponse:
    """Respond to errors raised on purpose by the pipelines."""
    if error.status_code >= 500:  # noqa: PLR2004
        logger.opt(exception=error.__cause__).error(
            f"{fastapi_request.method} {fastapi_request.url.path} failed: "
            f"{error.message}"
        )
    return to_error_response(error)


async def handle_request_validation_error(
    fastapi_request: Request, error: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies the same way as other invalid input."""
    logger.debug(
        f"Malformed body of {fastapi_request.method} {fastapi_request.url.path}: "
        f"{error.errors()}"
    )
    return to_error_response(ValidationError("invalid request body"))


async def catch_unexpected_errors(
    fastapi_request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log an unexpected exception once and hide its details from the client."""
    try:
        return await call_next(fastapi_request)
    except Exception as error:
        logger.opt(exception=error).error(
            f"Unexpected error in {fastapi_request.method} {fastapi_request.url.path}."
        )
        return to_error_response(InternalError())


def register_exception_handlers(fastapi_app: FastAPI) -> None:
    """
    Register handlers turning exceptions into `{"error": ...}` responses.

    Call it before adding other middleware to keep the catch-all inside CORS.

    Args:
        fastapi_app (FastAPI): The application.
    """
    fastapi_app.add_exception_handler(HumanlyError, handle_application_error)
    fastapi_app.add_exception_handler(
        RequestValidationError, handle_request_validation_error
    )
    fastapi_app.middleware("http")(catch_unexpected_errors)
