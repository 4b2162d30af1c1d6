"""Fee schedule and payment breakdown endpoints"""

from fastapi import APIRouter
import logging

from tuition_relay.core.errors import ValidationError
from tuition_relay.schemas.payments import (
    CalculatePaymentRequest,
    FeeStructureResponse,
    PaymentBreakdown
)
from tuition_relay.utils.pricing import FEE_SCHEDULE, compute_breakdown, is_chargeable
from tuition_relay.utils.validators import coerce_percentage

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/fees", response_model=FeeStructureResponse)
async def get_fees() -> FeeStructureResponse:
    """Fee structure for the frontend programme picker"""
    return FeeStructureResponse(feeStructure=dict(FEE_SCHEDULE))


@router.post("/calculate-payment", response_model=PaymentBreakdown)
async def calculate_payment(request: CalculatePaymentRequest) -> PaymentBreakdown:
    """
    Payment breakdown for frontend display

    Display only - initiate-payment recalculates the amount itself.
    """
    percentage = coerce_percentage(request.percentage)
    if not request.program or percentage is None:
        logger.warning(f"Invalid calculation request: program={request.program!r}, percentage={request.percentage!r}")
        raise ValidationError("Program and percentage are required for calculation.")

    breakdown = compute_breakdown(request.program, percentage)
    if not is_chargeable(breakdown):
        logger.warning(f"Breakdown out of range: program={request.program!r}, percentage={request.percentage!r}")
        raise ValidationError("Program and percentage are required for calculation.")
    return breakdown
