# asset_ledger/api/v1/reviewers.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from asset_ledger.core.auth_deps import get_caller
from asset_ledger.core.types import PRINCIPAL_MAX_LEN
from asset_ledger.db.session import get_db
from asset_ledger.schemas.reviewers import ReviewerResponse
from asset_ledger.services.asset_ledger_service import AssetLedgerService
from asset_ledger.services.host import LedgerHost, get_host, get_ledger_service

router = APIRouter(prefix="/reviewers")

Subject = Annotated[str, Path(min_length=1, max_length=PRINCIPAL_MAX_LEN)]


@router.put("/{subject}", response_model=ReviewerResponse)
def grant_reviewer_access(
    subject: Subject,
    db: Session = Depends(get_db),
    caller: str = Depends(get_caller),
    host: LedgerHost = Depends(get_host),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    """
    Administrator only. Idempotent.
    """
    with host.operation(db) as at:
        grant = svc.grant_reviewer(db, caller=caller, at=at, subject=subject)
        return {"reviewer": grant.reviewer, "enabled": grant.enabled, "enrolled_at": grant.enrolled_at}


@router.delete("/{subject}", response_model=ReviewerResponse)
def revoke_reviewer_access(
    subject: Subject,
    db: Session = Depends(get_db),
    caller: str = Depends(get_caller),
    host: LedgerHost = Depends(get_host),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    with host.operation(db) as at:
        grant = svc.revoke_reviewer(db, caller=caller, at=at, subject=subject)
        return {
            "reviewer": subject,
            "enabled": False,
            "enrolled_at": grant.enrolled_at if grant else None,
        }


@router.get("/{subject}", response_model=ReviewerResponse)
def fetch_reviewer(
    subject: Subject,
    db: Session = Depends(get_db),
    svc: AssetLedgerService = Depends(get_ledger_service),
):
    grant = svc.reviewers.get(db, subject)
    return {
        "reviewer": subject,
        "enabled": svc.is_reviewer_enabled(db, subject),
        "enrolled_at": grant.enrolled_at if grant else None,
    }
