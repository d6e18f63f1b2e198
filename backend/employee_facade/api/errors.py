"""Map upstream failures and invalid input to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from employee_facade.models.employee import validation_messages
from employee_facade.services.employee_api_client import (
    EmployeeApiError,
    RetriesExhaustedError,
    UpstreamProtocolError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: list[tuple[type[EmployeeApiError], int]] = [
    (RetriesExhaustedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (UpstreamUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (UpstreamProtocolError, status.HTTP_502_BAD_GATEWAY),
]


def status_for_error(exc: EmployeeApiError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_502_BAD_GATEWAY


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=validation_messages(exc.errors()),
    )


async def employee_api_exception_handler(request: Request, exc: EmployeeApiError) -> JSONResponse:
    status_code = status_for_error(exc)
    logger.error("%s %s failed with %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(EmployeeApiError, employee_api_exception_handler)
