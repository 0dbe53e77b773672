"""Translate domain exceptions into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invoicely.core.exceptions import (
    AlreadySubscribed,
    DeliveryError,
    DuplicateAccountError,
    InvalidTransitionError,
    InvoicelyException,
    MissingRecipient,
    NotFoundError,
    PaymentNotCompleted,
    PaymentProcessorError,
    TrialExpired,
    Unauthorized,
    ValidationError,
)
from invoicely.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)

# Most specific classes first; the first isinstance match wins.
STATUS_BY_ERROR: tuple[tuple[type[InvoicelyException], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (Unauthorized, status.HTTP_401_UNAUTHORIZED),
    (TrialExpired, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateAccountError, status.HTTP_409_CONFLICT),
    (AlreadySubscribed, status.HTTP_409_CONFLICT),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (PaymentNotCompleted, status.HTTP_402_PAYMENT_REQUIRED),
    (MissingRecipient, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (DeliveryError, status.HTTP_502_BAD_GATEWAY),
    (PaymentProcessorError, status.HTTP_502_BAD_GATEWAY),
)


def status_for(exc: InvoicelyException) -> int:
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, error_code: str, detail: str) -> JSONResponse:
    envelope = ErrorEnvelope(error_code=error_code, detail=detail)
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


async def handle_domain_error(request: Request, exc: InvoicelyException) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error("api.domain_error: %s", exc, extra={"event": "api.domain_error"})
    return error_response(code, exc.code, str(exc))


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = f"{location}: {first.get('msg', 'invalid input')}" if location else "Invalid request body."
    return error_response(status.HTTP_400_BAD_REQUEST, ValidationError.code, detail)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvoicelyException, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
