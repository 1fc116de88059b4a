from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from phonevalue.core.logger import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


def describe_validation_error(exc: RequestValidationError) -> str:
    """
    Turn the first pydantic error into a short sentence for the client,
    e.g. "Please provide all device details. condition: Field required".
    """
    errors = exc.errors()
    if not errors:
        return "Please provide all device details."

    first = errors[0]
    # loc looks like ("body", "condition", "screen_condition")
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    reason = first.get("msg", "Invalid value")
    if not location:
        return f"Please provide all device details. {reason}"
    return f"Please provide all device details. {location}: {reason}"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = describe_validation_error(exc)
    logger.error(f"Validation failed for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": INTERNAL_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
