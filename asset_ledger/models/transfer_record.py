# asset_ledger/models/transfer_record.py
from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    ForeignKey,
    Index,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from asset_ledger.db.base import Base
from asset_ledger.core.types import ASSET_ID_MAX_LEN, PRINCIPAL_MAX_LEN


class TransferRecord(Base):
    """
    Append-only hash-chained transfer log.

    sequence is global (shared by all assets), starts at 0, never reused.
    entry_hash = SHA256(prev_hash + canonical(payload))
    """

    __tablename__ = "transfer_records"

    sequence: Mapped[int] = mapped_column(
        BigInteger, primary_key=True, autoincrement=False
    )

    asset_id: Mapped[str] = mapped_column(
        String(ASSET_ID_MAX_LEN),
        ForeignKey("asset_records.id", ondelete="RESTRICT"),
        nullable=False,
    )
    sender: Mapped[str] = mapped_column(String(PRINCIPAL_MAX_LEN), nullable=False)
    receiver: Mapped[str] = mapped_column(String(PRINCIPAL_MAX_LEN), nullable=False)
    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)

    occurred_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    prev_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    entry_hash: Mapped[str] = mapped_column(String(64), nullable=False)

    __table_args__ = (
        CheckConstraint("sequence >= 0", name="ck_transfer_records_seq_nonnegative"),
        CheckConstraint("quantity > 0", name="ck_transfer_records_quantity_positive"),
        Index("ix_transfer_records_asset", "asset_id"),
    )

    def payload(self) -> dict:
        """Fields covered by entry_hash."""
        return {
            "sequence": self.sequence,
            "asset_id": self.asset_id,
            "sender": self.sender,
            "receiver": self.receiver,
            "quantity": self.quantity,
            "occurred_at": self.occurred_at,
        }
