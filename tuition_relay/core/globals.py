# ============================================================================
# FILE: tuition_relay/core/globals.py
# ============================================================================
"""Global application instances - gateway client and config"""

from typing import Optional
import httpx
from tuition_relay.core.config import GatewayConfig

# Global instances, set by the lifespan handler
http_client: Optional[httpx.AsyncClient] = None
gateway_config: Optional[GatewayConfig] = None
