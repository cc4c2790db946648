# asset_ledger/models/reviewer_grant.py
from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from asset_ledger.db.base import Base
from asset_ledger.core.types import PRINCIPAL_MAX_LEN


class ReviewerGrant(Base):
    """
    Reviewer role grant. Revocation flips `enabled`; the row and its
    enrolled_at are kept.
    """

    __tablename__ = "reviewer_grants"

    reviewer: Mapped[str] = mapped_column(String(PRINCIPAL_MAX_LEN), primary_key=True)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    enrolled_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
