
# ============================================================================
# FILE: tuition_relay/utils/validators.py
# ============================================================================
"""Input validation utilities"""

from typing import Any, Optional, Tuple, Union
import logging
import math

from tuition_relay.schemas.payments import PaymentRequest

logger = logging.getLogger(__name__)

REQUIRED_PAYER_FIELDS = ("fullName", "email", "phone", "gender", "program")

def coerce_percentage(value: Any) -> Optional[Union[int, float]]:
    """Turn a submitted percentage into a number

    Numbers pass through unchanged and numeric strings ("50", " 12.5 ") are
    parsed. Range is not checked.

    Args:
        value: Raw percentage from the request body

    Returns:
        The number, or None if the value is missing, non-numeric or not finite
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None

    try:
        if not math.isfinite(number):
            return None
    except OverflowError:
        return None
    return number

def validate_payment_request(request: PaymentRequest) -> Tuple[bool, str]:
    """Validate a payment initiation request

    Args:
        request: PaymentRequest as received from the client

    Returns:
        Tuple of (is_valid, error_message)
    """
    missing = [name for name in REQUIRED_PAYER_FIELDS if not getattr(request, name)]
    if missing:
        error_msg = f"Missing required fields: {', '.join(missing)}"
        logger.warning(error_msg)
        return False, error_msg

    if coerce_percentage(request.percentage) is None:
        error_msg = f"Invalid percentage: {request.percentage!r}"
        logger.warning(error_msg)
        return False, error_msg

    return True, ""
