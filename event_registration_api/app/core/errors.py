"""
Application-wide exception handlers.

Request validation failures are reported as ``400`` with a list of
``{field, message}`` pairs instead of FastAPI's default ``422`` body.
A malformed path parameter can only be an event identifier, so it is
reported as a missing event.  Anything unexpected is logged with its
traceback and answered with an opaque ``500``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse


logger = logging.getLogger(__name__)


# Messages for missing or empty required fields, keyed by the field
# name as it appears in the JSON body.
REQUIRED_MESSAGES = {
    "title": "Title is required",
    "description": "Description is required",
    "dateStart": "Start date is required",
    "dateEnd": "End date is required",
    "type": "Type is required",
    "location": "Location is required",
    "name": "Name is required",
    "phone": "Phone number is required",
    "shortId": "Registration code is required",
    "status": "Status is required",
    "email": "Please include a valid email",
    "password": "Password is required",
}

_REQUIRED_ERROR_TYPES = {"missing", "string_too_short"}


def format_validation_errors(errors) -> list[dict]:
    """Convert pydantic error dicts into ``{field, message}`` pairs."""
    formatted = []
    for error in errors:
        loc = error.get("loc", ())
        field = str(loc[-1]) if len(loc) > 1 else "body"
        error_type = error.get("type")
        if field == "body" and error_type == "missing":
            message = "Request body is required"
        elif error_type in _REQUIRED_ERROR_TYPES and field in REQUIRED_MESSAGES:
            message = REQUIRED_MESSAGES[field]
        elif error_type == "value_error" and "error" in error.get("ctx", {}):
            message = str(error["ctx"]["error"])
        else:
            message = error.get("msg", "Invalid value")
        formatted.append({"field": field, "message": message})
    return formatted


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(error.get("loc", ())[:1] == ("path",) for error in errors):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Event not found"},
        )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": format_validation_errors(errors)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse("Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the validation and catch-all handlers to ``app``."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
