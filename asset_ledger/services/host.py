# asset_ledger/services/host.py
from __future__ import annotations

import threading
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy.orm import Session

from asset_ledger.core.config import get_settings
from asset_ledger.services.asset_ledger_service import AssetLedgerService
from asset_ledger.services.counter_service import BLOCK_HEIGHT, CounterService


class LedgerHost:
    """
    Execution host for mutating operations outside a blockchain.

    Provides what the ledger core assumes:
    - serial execution (one process-wide operation lock)
    - a logical clock: block height, advanced once per operation inside the
      operation's own transaction, so a rejected operation leaves it unchanged
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.counters = CounterService()

    def block_height(self, db: Session) -> int:
        return self.counters.current(db, BLOCK_HEIGHT)

    @contextmanager
    def operation(self, db: Session) -> Iterator[int]:
        with self._lock:
            try:
                yield self.counters.increment(db, BLOCK_HEIGHT)
            finally:
                # Anything the operation did not commit is discarded.
                db.rollback()


@lru_cache(maxsize=1)
def get_host() -> LedgerHost:
    return LedgerHost()


@lru_cache(maxsize=1)
def get_ledger_service() -> AssetLedgerService:
    return AssetLedgerService(administrator=get_settings().administrator)
