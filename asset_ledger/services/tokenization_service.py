# asset_ledger/services/tokenization_service.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from asset_ledger.core.errors import LedgerInvariantError
from asset_ledger.models.token_spec import TokenSpec


class TokenizationLedger:
    """
    One TokenSpec per asset, ever. Rows are never updated.
    """

    def get(self, db: Session, asset_id: str) -> Optional[TokenSpec]:
        return db.get(TokenSpec, asset_id)

    def exists(self, db: Session, asset_id: str) -> bool:
        return self.get(db, asset_id) is not None

    def create(
        self,
        db: Session,
        *,
        asset_id: str,
        supply: int,
        precision: int,
        token_uri: str,
        at: int,
    ) -> TokenSpec:
        if self.exists(db, asset_id):
            raise LedgerInvariantError(f"TokenSpec already present for {asset_id}")

        spec = TokenSpec(
            asset_id=asset_id,
            supply=supply,
            precision=precision,
            token_uri=token_uri,
            activated_at=at,
        )
        db.add(spec)
        db.flush()
        return spec
