# asset_ledger/api/v1/ledger.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from asset_ledger.db.session import get_db
from asset_ledger.schemas.ledger import (
    ChainVerifyResponse,
    LedgerStatsResponse,
    TransferLogResponse,
)
from asset_ledger.services.asset_ledger_service import AssetLedgerService
from asset_ledger.services.host import LedgerHost, get_host, get_ledger_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ledger")


@router.get("/transfers", response_model=TransferLogResponse)
def list_transfers(
    asset_id: Optional[str] = Query(default=None, alias="assetId"),
    db: Session = Depends(get_db),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    """
    Read-only transfer log, sequence order.
    """
    entries = svc.list_transfers(db, asset_id=asset_id)
    logger.info("[ledger] returning %d transfers asset=%s", len(entries), asset_id or "<all>")
    return {
        "transfers": [
            {**e.payload(), "prev_hash": e.prev_hash, "entry_hash": e.entry_hash}
            for e in entries
        ]
    }


@router.get("/verify", response_model=ChainVerifyResponse)
def verify_transfer_chain(
    db: Session = Depends(get_db),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    """
    Verifies hash-chain integrity of the transfer log.
    """
    ok = svc.verify_transfer_log(db)
    stats = svc.get_stats(db)
    logger.info("[ledger/verify] valid=%s entries=%d", ok, stats.transfer_count)
    return {"valid": ok, "entries": stats.transfer_count}


@router.get("/stats", response_model=LedgerStatsResponse)
def ledger_stats(
    db: Session = Depends(get_db),
    svc: AssetLedgerService = Depends(get_ledger_service),
    host: LedgerHost = Depends(get_host),
):
    stats = svc.get_stats(db)
    return {
        "asset_count": stats.asset_count,
        "reviewer_count": stats.reviewer_count,
        "transfer_count": stats.transfer_count,
        "block_height": host.block_height(db),
    }
