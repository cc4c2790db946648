# asset_ledger/models/asset_record.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from asset_ledger.db.base import Base
from asset_ledger.core.types import (
    ASSET_ID_MAX_LEN,
    INTEGRITY_HASH_MAX_LEN,
    PRINCIPAL_MAX_LEN,
    URI_MAX_LEN,
    LifecycleState,
)


class AssetRecord(Base):
    """
    Authoritative record for one registered asset.

    Immutable after enrollment: id, originator, integrity_hash, created_at.
    decommissioned only ever flips false -> true, together with
    lifecycle_state -> INACTIVE.
    """

    __tablename__ = "asset_records"

    id: Mapped[str] = mapped_column(String(ASSET_ID_MAX_LEN), primary_key=True)

    originator: Mapped[str] = mapped_column(String(PRINCIPAL_MAX_LEN), nullable=False)

    lifecycle_state: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        server_default=text(str(int(LifecycleState.PENDING))),
    )

    # Review decision (absent until assessed)
    reviewer: Mapped[Optional[str]] = mapped_column(
        String(PRINCIPAL_MAX_LEN), nullable=True
    )
    reviewed_at: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    metadata_uri: Mapped[str] = mapped_column(String(URI_MAX_LEN), nullable=False)
    integrity_hash: Mapped[str] = mapped_column(
        String(INTEGRITY_HASH_MAX_LEN), nullable=False
    )

    # Logical time (host block height)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    modified_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    decommissioned: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )

    token_spec = relationship("TokenSpec", back_populates="asset", uselist=False)

    __table_args__ = (
        CheckConstraint(
            "lifecycle_state BETWEEN 1 AND 5", name="ck_asset_records_state_range"
        ),
        Index("ix_asset_records_originator", "originator"),
        Index("ix_asset_records_state", "lifecycle_state"),
    )

    @property
    def state(self) -> LifecycleState:
        return LifecycleState(self.lifecycle_state)
