from fastapi import APIRouter, Depends, Request

from asset_ledger.core.config import Settings, get_settings

router = APIRouter()


@router.get("/health")
async def health(request: Request, settings: Settings = Depends(get_settings)):
    """Liveness only; does not touch the database."""
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "request_id": getattr(request.state, "request_id", None),
    }
