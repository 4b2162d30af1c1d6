# ============================================================================
# FILE: tuition_relay/core/dependencies.py
# ============================================================================
"""Dependency injection for FastAPI routes"""

from fastapi import Depends, HTTPException, status
import httpx
import logging

from tuition_relay.core import globals as app_globals
from tuition_relay.core.config import GatewayConfig
from tuition_relay.utils.initiator import PaymentInitiator

logger = logging.getLogger(__name__)

async def get_http_client() -> httpx.AsyncClient:
    """Get the shared gateway HTTP client"""
    if app_globals.http_client is None:
        logger.error("Gateway HTTP client is not available")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payment gateway client unavailable"
        )
    return app_globals.http_client

async def get_gateway_config() -> GatewayConfig:
    """Get the gateway configuration built at startup"""
    if app_globals.gateway_config is None:
        logger.error("Gateway configuration is not loaded")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payment gateway configuration unavailable"
        )
    return app_globals.gateway_config

async def get_initiator(
    config: GatewayConfig = Depends(get_gateway_config),
    client: httpx.AsyncClient = Depends(get_http_client)
) -> PaymentInitiator:
    """Get a payment initiator bound to the shared config and client

    Usage in routes:
        initiator: PaymentInitiator = Depends(get_initiator)
    """
    return PaymentInitiator(config, client)
