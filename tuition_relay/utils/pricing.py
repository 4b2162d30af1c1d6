# ============================================================================
# FILE: tuition_relay/utils/pricing.py
# ============================================================================
"""Server-side tuition amount calculation"""

from types import MappingProxyType
from typing import Mapping
import logging
import math

from tuition_relay.schemas.payments import PaymentBreakdown

logger = logging.getLogger(__name__)

BANK_CHARGE_RATE = 0.02

# Programme code -> total fee in naira. Read-only for the life of the process.
FEE_SCHEDULE: Mapping[str, int] = MappingProxyType({
    "DBA": 1158650, "DBA_PFG": 1158650, "DBA_CGL": 1158650, "DBA_AIS": 1158650, "DBA_AFI": 1158650,
    "DBA_ENT": 1158650, "DBA_PAP": 1158650, "DBA_TECH": 1158650, "DBA_DSA": 1158650, "DBA_HMN": 1158650,
    "DBA_PSM": 1158650, "DBA_PM": 1158650, "DBA_EE": 1158650, "DBA_HRM": 1158650, "DBA_MM": 1158650,
    "DPA": 816450, "DPA_SSS": 816450, "DPA_LDS": 816450,
    "MPFG": 581450, "MCGL": 581450, "MAIS": 581450, "MAFI": 581450, "MENT": 581450, "MSSS": 581450,
    "MTFP": 581450, "MLDS": 581450, "MPAP": 581450, "MPSS": 581450, "MEE": 581450, "MFIN": 581450,
    "MDATA": 581450, "MPRO": 581450, "MHRM": 581450, "MMAR": 581450, "MICM": 581450,
    "MBA": 816450, "MScA": 816450, "MPhilA": 816450,
    "PGD_ACC": 275000, "PGD_MGMT": 275000,
})


def compute_breakdown(
    program: str,
    percentage: float,
    fee_schedule: Mapping[str, int] = FEE_SCHEDULE
) -> PaymentBreakdown:
    """Compute the amount to charge for `percentage` of a programme's fee

    Never raises for numeric input. The percentage is not range checked:
    negative or >100 values flow straight through the arithmetic.

    Args:
        program: Programme code, looked up in `fee_schedule`
        percentage: Share of the total fee being paid

    Returns:
        PaymentBreakdown, all zeros when the programme is unknown
    """
    if program in fee_schedule:
        total_fee = fee_schedule[program]
    else:
        # Unknown programmes are charged nothing rather than rejected
        logger.warning(f"Unknown programme code '{program}', using a total fee of 0")
        total_fee = 0

    try:
        school_fees = (total_fee * percentage) / 100
    except OverflowError:
        # Huge ints overflow the float range; carry on as +/-inf like floats do
        school_fees = math.inf if total_fee * percentage > 0 else -math.inf
    bank_charges = school_fees * BANK_CHARGE_RATE
    total_amount = school_fees + bank_charges

    return PaymentBreakdown(
        totalFee=total_fee,
        schoolFees=school_fees,
        bankCharges=bank_charges,
        totalAmount=total_amount
    )


def is_chargeable(breakdown: PaymentBreakdown) -> bool:
    """The total is a finite amount that can be sent to the gateway"""
    return math.isfinite(breakdown.totalAmount)


def round_to_naira(amount: float) -> int:
    """Round to the nearest whole naira, halves up (the gateway takes whole naira)"""
    return math.floor(amount + 0.5)
