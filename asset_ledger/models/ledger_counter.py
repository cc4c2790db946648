# asset_ledger/models/ledger_counter.py
from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from asset_ledger.db.base import Base


class LedgerCounter(Base):
    """
    Named monotonic counters (transfer sequence, registry size, reviewer
    count, host block height). Rows are created lazily at 0.
    """

    __tablename__ = "ledger_counters"

    name: Mapped[str] = mapped_column(String(32), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
