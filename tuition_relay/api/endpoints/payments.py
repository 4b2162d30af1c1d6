# ============================================================================
# FILE: tuition_relay/api/endpoints/payments.py
# ============================================================================
"""Payment initiation endpoint"""

from fastapi import APIRouter, Depends
import logging

from tuition_relay.core.dependencies import get_initiator
from tuition_relay.schemas.payments import (
    ErrorResponse,
    InitiatePaymentResponse,
    PaymentRequest
)
from tuition_relay.utils.initiator import PaymentInitiator

logger = logging.getLogger(__name__)
router = APIRouter()


# ==================== INITIATE PAYMENT ====================

@router.post(
    "/initiate-payment",
    response_model=InitiatePaymentResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    }
)
async def initiate_payment(
    request: PaymentRequest,
    initiator: PaymentInitiator = Depends(get_initiator)
) -> InitiatePaymentResponse:
    """
    Initiate a tuition payment with ZainPay
    Steps:
    1. Validate payer details and gateway keys
    2. Recalculate the amount server-side
    3. Ask ZainPay for a hosted payment page
    4. Return its URL for the frontend to redirect to

    Failures are raised as PaymentInitiationError and rendered by the
    registered exception handler.
    """
    logger.info(f"🔄 Payment initiation requested for {request.email} ({request.program})")
    payment_url = await initiator.initiate(request)
    logger.info(f"✅ Payment URL issued for {request.email}")
    return InitiatePaymentResponse(payment_url=payment_url)
