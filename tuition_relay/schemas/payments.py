# tuition_relay/schemas/payments.py
"""Payment-related schemas"""

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


# ==================== REQUEST SCHEMAS ====================
# Fields are optional here so that a missing value is reported by our
# validators with the service's own 400 message.

class CalculatePaymentRequest(BaseModel):
    """Payment breakdown request for frontend display"""
    program: Optional[str] = Field(None, description="Programme code, e.g. MBA")
    percentage: Optional[Any] = Field(None, description="Percentage of the total fee being paid")

    class Config:
        example = {"program": "MBA", "percentage": 50}


class PaymentRequest(BaseModel):
    """Initiate tuition payment request"""
    fullName: Optional[str] = Field(None, description="Payer full name")
    email: Optional[str] = Field(None, description="Payer email")
    phone: Optional[str] = Field(None, description="Payer phone number")
    gender: Optional[str] = Field(None, description="Payer gender")
    program: Optional[str] = Field(None, description="Programme code")
    percentage: Optional[Any] = Field(None, description="Percentage of the total fee being paid")

    class Config:
        example = {
            "fullName": "Ada Obi",
            "email": "ada@example.com",
            "phone": "+234 803 123 4567",
            "gender": "female",
            "program": "PGD_ACC",
            "percentage": 100
        }


# ==================== RESPONSE SCHEMAS ====================

class PaymentBreakdown(BaseModel):
    """Server-side amount calculation, all amounts in naira"""
    totalFee: int = Field(..., description="Base fee for the programme (0 if unknown)")
    schoolFees: float = Field(..., description="totalFee * percentage / 100")
    bankCharges: float = Field(..., description="2% of schoolFees")
    totalAmount: float = Field(..., description="schoolFees + bankCharges")


class FeeStructureResponse(BaseModel):
    """Full fee schedule"""
    feeStructure: Dict[str, int] = Field(..., description="Programme code to total fee")


class InitiatePaymentResponse(BaseModel):
    """Hosted payment page to redirect the payer to"""
    payment_url: str = Field(..., description="Gateway payment URL")


class ErrorResponse(BaseModel):
    """Error body returned for every failure"""
    message: str = Field(..., description="Human readable error message")
    details: Optional[Any] = Field(None, description="Raw gateway payload, when the gateway produced the error")


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    timestamp: str = Field(..., description="UTC timestamp")
    version: str = Field(..., description="API version")
