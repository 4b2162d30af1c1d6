
# tuition_relay/core/config.py

"""Application configuration from environment variables"""

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings # type: ignore
from typing import List, Optional
import os


class GatewayConfig(BaseModel):
    """Gateway credentials and fixed call parameters, built once at startup"""
    model_config = ConfigDict(frozen=True)

    secret_key: Optional[str] = None
    zainbox_code: Optional[str] = None
    api_url: str
    callback_url: str
    logo_url: str
    txn_ref_prefix: str = 'ANAN'
    retry_attempts: int = 0
    retry_backoff_seconds: float = 1.0

    @property
    def is_configured(self) -> bool:
        """Both the secret key and the zainbox code are present"""
        return bool(self.secret_key) and bool(self.zainbox_code)


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # API
    API_TITLE: str = 'ANAN Tuition Payments'
    API_VERSION: str = '1.0.0'
    PORT: int = 3000

    # CORS - payments are real money, keep this to explicit origins
    CORS_ORIGINS: List[str] = [
        'https://abs.ananuniversity.edu.ng'
    ]

    # ZainPay
    ZAINPAY_SECRET_KEY: Optional[str] = None
    ZAINBOX_CODE: Optional[str] = None
    ZAINPAY_API_URL: str = 'https://api.zainpay.ng/v1/merchant/initialize/payment'
    CALLBACK_URL: str = 'https://abs.ananuniversity.edu.ng/payment-success'
    LOGO_URL: str = 'https://abs.ananuniversity.edu.ng/wp-content/uploads/2025/05/WhatsApp-Image-2025-05-01-at-10.04.58.jpeg'
    TXN_REF_PREFIX: str = 'ANAN'

    # Retries on an unreachable gateway only (0 = single call)
    GATEWAY_RETRY_ATTEMPTS: int = 0
    GATEWAY_RETRY_BACKOFF_SECONDS: float = 1.0

    # Logging
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @field_validator('CORS_ORIGINS')
    @classmethod
    def reject_wildcard_origin(cls, v):
        """Refuse '*' - only allow-listed origins may trigger payments"""
        if not v:
            raise ValueError("At least one CORS origin is required")
        if any(origin.strip() == '*' for origin in v):
            raise ValueError("Wildcard CORS origin is not allowed")
        return v

    @field_validator('GATEWAY_RETRY_ATTEMPTS')
    @classmethod
    def non_negative_retries(cls, v):
        if v < 0:
            raise ValueError("GATEWAY_RETRY_ATTEMPTS cannot be negative")
        return v

    def gateway_config(self) -> GatewayConfig:
        """Snapshot the gateway settings into an immutable struct"""
        return GatewayConfig(
            secret_key=self.ZAINPAY_SECRET_KEY,
            zainbox_code=self.ZAINBOX_CODE,
            api_url=self.ZAINPAY_API_URL,
            callback_url=self.CALLBACK_URL,
            logo_url=self.LOGO_URL,
            txn_ref_prefix=self.TXN_REF_PREFIX,
            retry_attempts=self.GATEWAY_RETRY_ATTEMPTS,
            retry_backoff_seconds=self.GATEWAY_RETRY_BACKOFF_SECONDS,
        )

    class Config:
        env_file = '.env'
        case_sensitive = True

settings = Settings()
