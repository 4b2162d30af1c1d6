"""Main API router"""

from fastapi import APIRouter

from tuition_relay.api.endpoints import fees, payments

router = APIRouter()


# Paths are flat under /api to match what the frontend calls
router.include_router(fees.router, tags=["Fees"])
router.include_router(payments.router, tags=["Payments"])
