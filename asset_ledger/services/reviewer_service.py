# asset_ledger/services/reviewer_service.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from asset_ledger.models.reviewer_grant import ReviewerGrant


class ReviewerRoster:
    def get(self, db: Session, subject: str) -> Optional[ReviewerGrant]:
        return db.get(ReviewerGrant, subject)

    def enable(self, db: Session, subject: str, *, at: int) -> tuple[ReviewerGrant, bool]:
        """
        Returns (grant, created). Re-enabling keeps the original enrolled_at.
        """
        grant = self.get(db, subject)
        if grant is None:
            grant = ReviewerGrant(reviewer=subject, enabled=True, enrolled_at=at)
            db.add(grant)
            db.flush()
            return grant, True

        grant.enabled = True
        return grant, False

    def disable(self, db: Session, subject: str) -> Optional[ReviewerGrant]:
        # Unknown subjects have nothing to revoke.
        grant = self.get(db, subject)
        if grant is not None:
            grant.enabled = False
        return grant
