# asset_ledger/services/counter_service.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from asset_ledger.models.ledger_counter import LedgerCounter


TRANSFER_SEQUENCE = "transfer_sequence"
ASSET_COUNT = "asset_count"
REVIEWER_COUNT = "reviewer_count"
BLOCK_HEIGHT = "block_height"


class CounterService:
    """
    Monotonic named counters. Never decremented.
    """

    def current(self, db: Session, name: str) -> int:
        row = db.get(LedgerCounter, name)
        return row.value if row else 0

    def _row_for_update(self, db: Session, name: str) -> LedgerCounter:
        row = db.execute(
            select(LedgerCounter)
            .where(LedgerCounter.name == name)
            .with_for_update()
        ).scalar_one_or_none()
        if row is None:
            row = LedgerCounter(name=name, value=0)
            db.add(row)
            db.flush()
        return row

    def take(self, db: Session, name: str) -> int:
        """
        Post-increment: returns the current value, then advances.
        Used for sequences that start at 0.
        """
        row = self._row_for_update(db, name)
        value = row.value
        row.value = value + 1
        db.flush()
        return value

    def increment(self, db: Session, name: str) -> int:
        """
        Pre-increment: advances, then returns the new value.
        """
        row = self._row_for_update(db, name)
        row.value = row.value + 1
        db.flush()
        return row.value
