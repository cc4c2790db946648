# asset_ledger/services/transfer_log_service.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from asset_ledger.core.hashing import GENESIS_HASH, chain_digest, link_holds
from asset_ledger.models.transfer_record import TransferRecord
from asset_ledger.services.counter_service import CounterService, TRANSFER_SEQUENCE


class TransferLogService:
    """
    Append-only transfer log.
    Sequence numbers are global across assets and start at 0.
    """

    def __init__(self, counters: Optional[CounterService] = None):
        self.counters = counters or CounterService()

    # ─────────────────────────────────────────────
    # INTERNAL HELPERS
    # ─────────────────────────────────────────────

    def _get_last_entry(self, db: Session) -> Optional[TransferRecord]:
        return db.execute(
            select(TransferRecord)
            .order_by(TransferRecord.sequence.desc())
            .limit(1)
        ).scalar_one_or_none()

    # ─────────────────────────────────────────────
    # PUBLIC API
    # ─────────────────────────────────────────────

    def append(
        self,
        db: Session,
        *,
        asset_id: str,
        sender: str,
        receiver: str,
        quantity: int,
        occurred_at: int,
    ) -> TransferRecord:
        """
        Append one immutable record. Flushes; the caller owns the commit.
        """
        last = self._get_last_entry(db)
        prev_hash = last.entry_hash if last else GENESIS_HASH
        sequence = self.counters.take(db, TRANSFER_SEQUENCE)

        row = TransferRecord(
            sequence=sequence,
            asset_id=asset_id,
            sender=sender,
            receiver=receiver,
            quantity=quantity,
            occurred_at=occurred_at,
            prev_hash=prev_hash,
        )
        row.entry_hash = chain_digest(prev_hash, row.payload())

        db.add(row)
        db.flush()
        return row

    # ─────────────────────────────────────────────
    # READ-ONLY HELPERS (AUDIT)
    # ─────────────────────────────────────────────

    def list_entries(
        self,
        db: Session,
        *,
        asset_id: Optional[str] = None,
    ) -> list[TransferRecord]:
        stmt = select(TransferRecord).order_by(TransferRecord.sequence.asc())
        if asset_id is not None:
            stmt = stmt.where(TransferRecord.asset_id == asset_id)
        return list(db.execute(stmt).scalars().all())

    def count(self, db: Session) -> int:
        return self.counters.current(db, TRANSFER_SEQUENCE)

    def verify_chain(self, db: Session) -> bool:
        """
        Recomputes every hash and checks sequences are contiguous from 0.
        """
        prev_hash = GENESIS_HASH

        for expected_seq, e in enumerate(self.list_entries(db)):
            if e.sequence != expected_seq or e.prev_hash != prev_hash:
                return False
            if not link_holds(prev_hash, e.entry_hash, e.payload()):
                return False
            prev_hash = e.entry_hash

        return True
