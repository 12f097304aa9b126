"""
Error mapping - Domain errors to HTTP responses.

Only the error classification crosses the boundary. Messages are fixed
per kind so that engine text and lookup keys never appear in a response.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.exceptions import (
    AddressBookError,
    AddressBookNotFound,
    ContactNotFound,
    DatabaseQueryError,
    InvalidLoadStrategy,
    InvalidPagination,
    JsonDeserializationError,
    MissingParameters,
)

logger = logging.getLogger(__name__)

_ERROR_RESPONSES: dict[type[AddressBookError], tuple[int, str]] = {
    DatabaseQueryError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong"),
    AddressBookNotFound: (status.HTTP_404_NOT_FOUND, "Address book not found"),
    ContactNotFound: (status.HTTP_404_NOT_FOUND, "Contact not found"),
    InvalidLoadStrategy: (status.HTTP_400_BAD_REQUEST, "Invalid load strategy"),
    MissingParameters: (status.HTTP_400_BAD_REQUEST, "Missing parameters"),
    InvalidPagination: (status.HTTP_400_BAD_REQUEST, "Invalid pagination parameters"),
    JsonDeserializationError: (status.HTTP_400_BAD_REQUEST, "Json deserialization error"),
}


def http_error(error: AddressBookError) -> HTTPException:
    """Build the HTTPException for a domain error."""
    for error_type in type(error).__mro__:
        if error_type in _ERROR_RESPONSES:
            status_code, detail = _ERROR_RESPONSES[error_type]
            break
    else:
        status_code, detail = _ERROR_RESPONSES[DatabaseQueryError]

    if status_code >= 500:
        logger.error(f"Request failed: {type(error).__name__}")
    return HTTPException(status_code=status_code, detail=detail)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report malformed requests as 400 Bad Request.

    Body failures are reported as a JSON deserialization error; anything
    else (e.g. a non-integer path id) as invalid request parameters.
    """
    in_body = any(error.get("loc", ("",))[0] == "body" for error in exc.errors())
    if not in_body:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request parameters"},
        )

    error = http_error(JsonDeserializationError())
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the boundary's exception handlers on an application."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
