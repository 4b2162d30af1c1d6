# ============================================================================
# FILE: tuition_relay/__init__.py
# ============================================================================
"""ANAN Tuition Payments API - Application Factory"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import httpx
import logging

from tuition_relay.core.config import settings
from tuition_relay.core import globals as app_globals
from tuition_relay.core.errors import register_exception_handlers
from tuition_relay.api.routes import router as api_router
from tuition_relay.schemas.payments import HealthCheckResponse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown"""
    # Startup
    logger.info("Starting application...")
    app_globals.gateway_config = settings.gateway_config()
    app_globals.http_client = httpx.AsyncClient()

    if app_globals.gateway_config.is_configured:
        logger.info("✓ Gateway client initialized")
    else:
        logger.warning("ZAINPAY_SECRET_KEY or ZAINBOX_CODE is not set - payment initiation will fail")

    yield

    # Shutdown
    try:
        if app_globals.http_client:
            await app_globals.http_client.aclose()
            logger.info("✓ Gateway client closed")
    except Exception as e:
        logger.error(f"Error closing gateway client: {e}")
    finally:
        app_globals.http_client = None

def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title=settings.API_TITLE,
        description="Server-side tuition amount calculation and ZainPay payment initiation",
        version=settings.API_VERSION,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        lifespan=lifespan
    )

    # CORS Configuration - explicit origins only
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(api_router, prefix="/api")

    # Health check endpoint
    @app.get("/health", response_model=HealthCheckResponse)
    async def health_check():
        return HealthCheckResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=settings.API_VERSION
        )

    logger.info("FastAPI application created")
    return app

# Create app instance
app = create_app()
