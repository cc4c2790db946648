from fastapi import APIRouter

from asset_ledger.api.v1.health import router as health_router
from asset_ledger.api.v1.assets import router as assets_router
from asset_ledger.api.v1.reviewers import router as reviewers_router
from asset_ledger.api.v1.ledger import router as ledger_router
from asset_ledger.schemas.assets import ErrorResponse


v1_router = APIRouter()

# Rejected ledger operations all share one body shape
LEDGER_ERRORS = {
    status: {"model": ErrorResponse} for status in (403, 404, 409, 422)
}

# ------------------------------------------------------------------
# SYSTEM
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])

# ------------------------------------------------------------------
# ASSET LIFECYCLE
# ------------------------------------------------------------------
v1_router.include_router(assets_router, tags=["assets"], responses=LEDGER_ERRORS)
v1_router.include_router(reviewers_router, tags=["reviewers"], responses=LEDGER_ERRORS)

# ------------------------------------------------------------------
# TRANSFER LOG (AUDIT)
# ------------------------------------------------------------------
v1_router.include_router(ledger_router, tags=["ledger"])
