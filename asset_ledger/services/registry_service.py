# asset_ledger/services/registry_service.py
from __future__ import annotations

from typing import Dict, FrozenSet, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from asset_ledger.core.errors import LedgerInvariantError
from asset_ledger.core.types import LifecycleState
from asset_ledger.models.asset_record import AssetRecord


S = LifecycleState

# Allowed lifecycle moves. APPROVED/DECLINED may be re-entered from each
# other: a second assessment overwrites the first until the asset is
# tokenized or decommissioned.
_TRANSITIONS: Dict[LifecycleState, FrozenSet[LifecycleState]] = {
    S.PENDING: frozenset({S.APPROVED, S.DECLINED, S.INACTIVE}),
    S.APPROVED: frozenset({S.APPROVED, S.DECLINED, S.ACTIVE, S.INACTIVE}),
    S.DECLINED: frozenset({S.APPROVED, S.DECLINED, S.INACTIVE}),
    S.ACTIVE: frozenset({S.INACTIVE}),
    S.INACTIVE: frozenset(),
}


class AssetRegistry:
    """
    Owner of AssetRecord rows. Every lifecycle move goes through `_move`,
    which refuses anything outside the state graph.

    Guards about *who* may trigger a move live in the operation layer; this
    class only keeps records internally consistent.
    """

    # ---------------------------
    # READS
    # ---------------------------

    def get(self, db: Session, asset_id: str) -> Optional[AssetRecord]:
        return db.get(AssetRecord, asset_id)

    def get_for_update(self, db: Session, asset_id: str) -> Optional[AssetRecord]:
        """
        Lock the asset row (FOR UPDATE) to serialize transitions.
        """
        return db.execute(
            select(AssetRecord)
            .where(AssetRecord.id == asset_id)
            .with_for_update()
        ).scalar_one_or_none()

    # ---------------------------
    # MUTATIONS
    # ---------------------------

    def create(
        self,
        db: Session,
        *,
        asset_id: str,
        originator: str,
        metadata_uri: str,
        integrity_hash: str,
        at: int,
    ) -> AssetRecord:
        asset = AssetRecord(
            id=asset_id,
            originator=originator,
            lifecycle_state=int(S.PENDING),
            reviewer=None,
            reviewed_at=None,
            metadata_uri=metadata_uri,
            integrity_hash=integrity_hash,
            created_at=at,
            modified_at=at,
            decommissioned=False,
        )
        db.add(asset)
        db.flush()
        return asset

    def set_metadata(self, asset: AssetRecord, *, metadata_uri: str, at: int) -> None:
        asset.metadata_uri = metadata_uri
        asset.modified_at = at

    def record_review(
        self,
        asset: AssetRecord,
        *,
        reviewer: str,
        approved: bool,
        at: int,
    ) -> None:
        self._move(asset, S.APPROVED if approved else S.DECLINED)
        asset.reviewer = reviewer
        asset.reviewed_at = at

    def activate(self, asset: AssetRecord) -> None:
        self._move(asset, S.ACTIVE)

    def deactivate(self, asset: AssetRecord, *, at: int) -> None:
        self._move(asset, S.INACTIVE)
        asset.decommissioned = True
        asset.modified_at = at

    def _move(self, asset: AssetRecord, target: LifecycleState) -> None:
        current = asset.state
        if target not in _TRANSITIONS[current]:
            raise LedgerInvariantError(
                f"Illegal lifecycle move for {asset.id}: {current.name} -> {target.name}"
            )
        asset.lifecycle_state = int(target)
