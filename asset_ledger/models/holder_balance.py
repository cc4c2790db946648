# asset_ledger/models/holder_balance.py
from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from asset_ledger.db.base import Base
from asset_ledger.core.types import ASSET_ID_MAX_LEN, PRINCIPAL_MAX_LEN


class HolderBalance(Base):
    __tablename__ = "holder_balances"

    asset_id: Mapped[str] = mapped_column(
        String(ASSET_ID_MAX_LEN),
        ForeignKey("asset_records.id", ondelete="RESTRICT"),
        primary_key=True,
    )
    holder: Mapped[str] = mapped_column(String(PRINCIPAL_MAX_LEN), primary_key=True)

    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_holder_balances_nonnegative"),
        Index("ix_holder_balances_holder", "holder"),
    )
