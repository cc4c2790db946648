# asset_ledger/policies/access.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from asset_ledger.models.asset_record import AssetRecord
from asset_ledger.models.reviewer_grant import ReviewerGrant


# Three roles, no hierarchy: the administrator is not implicitly an
# originator or a reviewer.


def is_administrator(caller: str, administrator: str) -> bool:
    return caller == administrator


def is_originator(db: Session, caller: str, asset_id: str) -> bool:
    """False when the asset does not exist."""
    asset: Optional[AssetRecord] = db.get(AssetRecord, asset_id)
    return asset is not None and asset.originator == caller


def is_enabled_reviewer(db: Session, caller: str) -> bool:
    grant: Optional[ReviewerGrant] = db.get(ReviewerGrant, caller)
    return bool(grant and grant.enabled)


def can_decommission(db: Session, caller: str, asset_id: str, administrator: str) -> bool:
    return is_originator(db, caller, asset_id) or is_administrator(caller, administrator)
