# asset_ledger/api/v1/assets.py
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from asset_ledger.core.auth_deps import get_caller
from asset_ledger.core.types import ASSET_ID_MAX_LEN
from asset_ledger.db.session import get_db
from asset_ledger.models.asset_record import AssetRecord
from asset_ledger.schemas.assets import (
    AmendRequest,
    AssessRequest,
    AssessResponse,
    AssetResponse,
    AssetStateResponse,
    BalanceResponse,
    EligibilityResponse,
    EnrollRequest,
    IssueRequest,
    IssueResponse,
    TokenSpecResponse,
    TransferRecordResponse,
    TransferRequest,
)
from asset_ledger.services.asset_ledger_service import AssetLedgerService
from asset_ledger.services.host import LedgerHost, get_host, get_ledger_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assets")

AssetIdPath = Annotated[str, Path(min_length=1, max_length=ASSET_ID_MAX_LEN)]


def _state(a: AssetRecord) -> dict:
    return {
        "asset_id": a.id,
        "state": a.lifecycle_state,
        "state_name": a.state.name,
    }


def _asset(a: AssetRecord) -> dict:
    return {
        **_state(a),
        "originator": a.originator,
        "reviewer": a.reviewer,
        "reviewed_at": a.reviewed_at,
        "metadata_uri": a.metadata_uri,
        "integrity_hash": a.integrity_hash,
        "created_at": a.created_at,
        "modified_at": a.modified_at,
        "decommissioned": a.decommissioned,
    }


# ─────────────────────────────────────────────
# MUTATIONS
# ─────────────────────────────────────────────

@router.post("", response_model=AssetStateResponse, status_code=201)
def enroll_asset(
    req: EnrollRequest,
    db: Session = Depends(get_db),
    caller: str = Depends(get_caller),
    host: LedgerHost = Depends(get_host),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    with host.operation(db) as at:
        asset = svc.enroll(
            db,
            caller=caller,
            at=at,
            asset_id=req.asset_id,
            metadata_uri=req.metadata_uri,
            integrity_hash=req.integrity_hash,
        )
        return _state(asset)


@router.patch("/{asset_id}", response_model=AssetStateResponse)
def amend_asset(
    asset_id: AssetIdPath,
    req: AmendRequest,
    db: Session = Depends(get_db),
    caller: str = Depends(get_caller),
    host: LedgerHost = Depends(get_host),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    with host.operation(db) as at:
        asset = svc.amend(db, caller=caller, at=at, asset_id=asset_id, metadata_uri=req.metadata_uri)
        return _state(asset)


@router.post("/{asset_id}/assessment", response_model=AssessResponse)
def assess_asset(
    asset_id: AssetIdPath,
    req: AssessRequest,
    db: Session = Depends(get_db),
    caller: str = Depends(get_caller),
    host: LedgerHost = Depends(get_host),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    with host.operation(db) as at:
        asset = svc.assess(db, caller=caller, at=at, asset_id=asset_id, approve=req.approve)
        return {
            **_state(asset),
            "approved": req.approve,
            "reviewer": asset.reviewer,
            "reviewed_at": asset.reviewed_at,
        }


@router.post("/{asset_id}/tokens", response_model=IssueResponse, status_code=201)
def issue_tokens(
    asset_id: AssetIdPath,
    req: IssueRequest,
    db: Session = Depends(get_db),
    caller: str = Depends(get_caller),
    host: LedgerHost = Depends(get_host),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    with host.operation(db) as at:
        spec = svc.issue(
            db,
            caller=caller,
            at=at,
            asset_id=asset_id,
            supply=req.supply,
            precision=req.precision,
            token_uri=req.token_uri,
        )
        return {**_state(spec.asset), "supply": spec.supply, "precision": spec.precision}


@router.post("/{asset_id}/transfers", response_model=TransferRecordResponse, status_code=201)
def transfer_tokens(
    asset_id: AssetIdPath,
    req: TransferRequest,
    db: Session = Depends(get_db),
    caller: str = Depends(get_caller),
    host: LedgerHost = Depends(get_host),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    with host.operation(db) as at:
        rec = svc.transfer(
            db,
            caller=caller,
            at=at,
            asset_id=asset_id,
            recipient=req.recipient,
            amount=req.amount,
        )
        return {**rec.payload(), "prev_hash": rec.prev_hash, "entry_hash": rec.entry_hash}


@router.post("/{asset_id}/decommission", response_model=AssetStateResponse)
def decommission_asset(
    asset_id: AssetIdPath,
    db: Session = Depends(get_db),
    caller: str = Depends(get_caller),
    host: LedgerHost = Depends(get_host),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    with host.operation(db) as at:
        asset = svc.decommission(db, caller=caller, at=at, asset_id=asset_id)
        return _state(asset)


# ─────────────────────────────────────────────
# READ-ONLY (no token required)
# ─────────────────────────────────────────────

@router.get("/{asset_id}", response_model=AssetResponse)
def fetch_asset(
    asset_id: AssetIdPath,
    db: Session = Depends(get_db),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    return _asset(svc.get_asset(db, asset_id))


@router.get("/{asset_id}/token", response_model=TokenSpecResponse)
def fetch_token_spec(
    asset_id: AssetIdPath,
    db: Session = Depends(get_db),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    spec = svc.get_token_spec(db, asset_id)
    return {
        "asset_id": spec.asset_id,
        "supply": spec.supply,
        "precision": spec.precision,
        "token_uri": spec.token_uri,
        "activated_at": spec.activated_at,
    }


@router.get("/{asset_id}/balances/{holder}", response_model=BalanceResponse)
def fetch_balance(
    asset_id: AssetIdPath,
    holder: str,
    db: Session = Depends(get_db),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    return {
        "asset_id": asset_id,
        "holder": holder,
        "balance": svc.get_balance(db, asset_id, holder),
    }


@router.get("/{asset_id}/eligibility", response_model=EligibilityResponse)
def check_eligibility(
    asset_id: AssetIdPath,
    sender: str = Query(...),
    recipient: str = Query(...),
    amount: int = Query(...),
    db: Session = Depends(get_db),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    eligible = svc.check_transfer_eligible(
        db, asset_id=asset_id, sender=sender, recipient=recipient, amount=amount
    )
    logger.debug("[assets] eligibility asset=%s sender=%s amount=%s -> %s", asset_id, sender, amount, eligible)
    return {
        "asset_id": asset_id,
        "sender": sender,
        "recipient": recipient,
        "amount": amount,
        "eligible": eligible,
    }
