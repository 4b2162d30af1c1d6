# ============================================================================
# FILE: tuition_relay/utils/initiator.py
# ============================================================================
"""Payment initiation against the ZainPay gateway"""

from typing import Any, Callable, Dict, Mapping, Optional
import logging
import re
import time

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from tuition_relay.core.config import GatewayConfig
from tuition_relay.core.errors import (
    ConfigurationError,
    GatewayProtocolError,
    GatewayRejectionError,
    GatewayUnreachableError,
    InternalError,
    PaymentInitiationError,
    ValidationError,
)
from tuition_relay.schemas.payments import PaymentRequest
from tuition_relay.utils.pricing import FEE_SCHEDULE, compute_breakdown, is_chargeable, round_to_naira
from tuition_relay.utils.validators import coerce_percentage, validate_payment_request

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def _now_ms() -> int:
    return int(time.time() * 1000)


def build_transaction_reference(phone: str, prefix: str = "ANAN", timestamp_ms: Optional[int] = None) -> str:
    """Build `{prefix}-{epoch millis}-{phone digits}`

    Two calls for the same phone inside the same millisecond collide; the
    gateway then sees a duplicate reference.
    """
    if timestamp_ms is None:
        timestamp_ms = _now_ms()
    return f"{prefix}-{timestamp_ms}-{_NON_DIGITS.sub('', phone)}"


def _safe_json(resp: httpx.Response) -> Any:
    """Return parsed json or text if JSON fails."""
    try:
        return resp.json()
    except ValueError:
        return resp.text


class PaymentInitiator:
    """Recomputes the amount server-side and asks the gateway for a payment page"""

    def __init__(
        self,
        config: GatewayConfig,
        client: httpx.AsyncClient,
        fee_schedule: Mapping[str, int] = FEE_SCHEDULE,
        clock: Callable[[], int] = _now_ms
    ):
        """
        Args:
            config: Gateway credentials and fixed call parameters
            client: Shared HTTP client used for the outbound call
            fee_schedule: Programme code -> total fee
            clock: Epoch milliseconds source for transaction references
        """
        self.config = config
        self.client = client
        self.fee_schedule = fee_schedule
        self.clock = clock

    async def initiate(self, request: PaymentRequest) -> str:
        """Initiate a payment and return the gateway's payment URL

        Steps:
        1. Validate the request and the gateway credentials
        2. Recalculate the amount (never trust the client's figure)
        3. Build a transaction reference
        4. Call ZainPay once (plus opt-in retries if unreachable)
        5. Map the gateway response to a URL or an error

        Raises:
            PaymentInitiationError: one of its subclasses for every failure
        """
        is_valid, error_msg = validate_payment_request(request)
        if not is_valid:
            logger.error(f"Validation Error: {error_msg}")
            raise ValidationError("Missing required payment details.")

        if not self.config.is_configured:
            logger.error("Server Configuration Error: ZAINPAY_SECRET_KEY or ZAINBOX_CODE is not set.")
            raise ConfigurationError("Server is not configured with payment keys.")

        try:
            percentage = coerce_percentage(request.percentage)
            breakdown = compute_breakdown(request.program, percentage, self.fee_schedule) # type: ignore
            if not is_chargeable(breakdown):
                logger.error(f"Validation Error: amount out of range for percentage {request.percentage!r}")
                raise ValidationError("Payment amount is out of range.")
            amount = round_to_naira(breakdown.totalAmount)
            txn_ref = build_transaction_reference(
                request.phone, self.config.txn_ref_prefix, self.clock() # type: ignore
            )

            logger.info(f"Initiating payment for {request.email} with amount {amount} Naira and ref {txn_ref}")

            response = await self._send(self._build_payload(request, amount, txn_ref))
        except PaymentInitiationError:
            raise
        except Exception as e:
            logger.error(f"❌ Error setting up request to ZainPay: {e}", exc_info=True)
            raise InternalError(f"Internal server error: {e}")

        return self._interpret(response)

    def _build_payload(self, request: PaymentRequest, amount: int, txn_ref: str) -> Dict[str, Any]:
        # ZainPay takes the amount in naira
        return {
            "amount": amount,
            "txnRef": txn_ref,
            "mobileNumber": request.phone,
            "emailAddress": request.email,
            "zainboxCode": self.config.zainbox_code,
            "callbackUrl": self.config.callback_url,
            "logoUrl": self.config.logo_url,
        }

    async def _send(self, payload: Dict[str, Any]) -> httpx.Response:
        """POST to the gateway, retrying only when it did not respond"""
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(GatewayUnreachableError),
            stop=stop_after_attempt(self.config.retry_attempts + 1),
            wait=wait_exponential(multiplier=self.config.retry_backoff_seconds, max=30),
            reraise=True,
        )
        response = None
        async for attempt in retrying:
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(f"Retrying ZainPay call for {payload['txnRef']} (attempt {attempt.retry_state.attempt_number})")
                response = await self._post(payload)
        return response # type: ignore

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        try:
            return await self.client.post(
                self.config.api_url,
                json=payload,
                headers={
                    "Authorization": f"Bearer {self.config.secret_key}",
                    "Content-Type": "application/json",
                }
            )
        except (httpx.UnsupportedProtocol, httpx.InvalidURL) as e:
            logger.error(f"❌ Error setting up request to ZainPay: {e}")
            raise InternalError(f"Internal server error: {e}")
        except httpx.TransportError as e:
            logger.error(f"❌ No response received from ZainPay API: {e!r}")
            raise GatewayUnreachableError()

    def _interpret(self, response: httpx.Response) -> str:
        data = _safe_json(response)

        if response.is_error:
            logger.error(f"ZainPay API Error Status: {response.status_code}")
            logger.error(f"ZainPay API Error Data: {data}")
            gateway_message = data.get("message") if isinstance(data, dict) else None
            raise GatewayRejectionError(
                response.status_code,
                f"ZainPay API Error: {gateway_message or 'Unknown API error'}",
                details=data
            )

        payment_url = data.get("paymentUrl") if isinstance(data, dict) else None
        if isinstance(payment_url, str) and payment_url:
            logger.info("✓ Payment initiated successfully via ZainPay")
            return payment_url

        logger.error(f"❌ ZainPay API Response Error: Missing paymentUrl or invalid data. {data}")
        raise GatewayProtocolError("Failed to obtain payment URL from ZainPay. Invalid response.")
