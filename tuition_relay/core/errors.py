# ============================================================================
# FILE: tuition_relay/core/errors.py
# ============================================================================
"""Payment initiation error taxonomy and the JSON handlers that surface it"""

from typing import Any, Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class PaymentInitiationError(Exception):
    """Base for every failure surfaced to the client as `{message, details}`"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_body(self) -> dict:
        body = {"message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(PaymentInitiationError):
    """Client input is missing or malformed"""
    status_code = status.HTTP_400_BAD_REQUEST


class ConfigurationError(PaymentInitiationError):
    """Gateway credentials are not configured on the server"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class GatewayRejectionError(PaymentInitiationError):
    """Gateway answered with an error status; the status is passed through"""

    def __init__(self, status_code: int, message: str, details: Any = None):
        super().__init__(message, status_code=status_code, details=details)


class GatewayUnreachableError(PaymentInitiationError):
    """No response from the gateway (network failure or timeout)"""
    status_code = status.HTTP_504_GATEWAY_TIMEOUT

    def __init__(self, message: str = "Payment gateway did not respond. Please try again."):
        super().__init__(message)


class GatewayProtocolError(PaymentInitiationError):
    """Gateway answered successfully but without a usable payment URL"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InternalError(PaymentInitiationError):
    """Any other local fault"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# ==================== HANDLERS ====================

async def payment_error_handler(request: Request, exc: PaymentInitiationError) -> JSONResponse:
    logger.error(f"❌ {request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_body()))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Malformed request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"message": "Invalid request body.", "details": exc.errors()})
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.error(f"❌ {request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure to a JSON body carrying at least `message`"""
    app.add_exception_handler(PaymentInitiationError, payment_error_handler) # type: ignore
    app.add_exception_handler(RequestValidationError, request_validation_handler) # type: ignore
    app.add_exception_handler(StarletteHTTPException, http_exception_handler) # type: ignore
