"""Domain error to HTTP response mapping.

Every error body has the shape ``{"error": code, "message": text}``,
including unexpected failures, which answer 500 ``internal_error``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.mealplan.core.exceptions.mealplan_errors import (
    ForbiddenError,
    IntegrityFaultError,
    InvalidPayloadError,
    MealPlanDomainError,
    MealPlanNotFoundError,
    PersistenceFaultError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

# Most specific class first: IntegrityFaultError is a PersistenceFaultError
STATUS_BY_ERROR = (
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (InvalidPayloadError, status.HTTP_400_BAD_REQUEST),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (MealPlanNotFoundError, status.HTTP_404_NOT_FOUND),
    (IntegrityFaultError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (PersistenceFaultError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: MealPlanDomainError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(code: str, message: str) -> dict:
    return {"error": code, "message": message}


async def meal_plan_error_handler(request: Request, exc: MealPlanDomainError) -> JSONResponse:
    status_code = status_for(exc)

    if status_code >= 500:
        logger.error(
            "request.failed",
            extra={"path": request.url.path, "error_code": exc.code, "error": exc.message},
        )
        # Store details stay in the log
        message = "Meal plan storage failed"
    else:
        logger.info(
            "request.rejected",
            extra={"path": request.url.path, "error_code": exc.code, "error": exc.message},
        )
        message = exc.message

    return JSONResponse(status_code=status_code, content=error_body(exc.code, message))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    reason = first.get("msg", "malformed request")
    message = f"Invalid meal plan payload at '{location}': {reason}" if location else reason

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(InvalidPayloadError.code, message),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "request.unhandled_error",
        extra={"path": request.url.path, "error_type": type(exc).__name__, "error": str(exc)},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("internal_error", "Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MealPlanDomainError, meal_plan_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
