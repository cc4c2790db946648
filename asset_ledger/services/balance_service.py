# asset_ledger/services/balance_service.py
from __future__ import annotations

from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from asset_ledger.models.holder_balance import HolderBalance


class BalanceLedger:
    """
    Per-(asset, holder) quantities. Plain reads and writes; every rule about
    when a balance may change lives in the operation layer.
    """

    def get_balance(self, db: Session, asset_id: str, holder: str) -> int:
        row = db.get(HolderBalance, (asset_id, holder))
        return row.quantity if row else 0

    def set_balance(self, db: Session, asset_id: str, holder: str, quantity: int) -> None:
        row = db.get(HolderBalance, (asset_id, holder))
        if row is None:
            row = HolderBalance(asset_id=asset_id, holder=holder, quantity=quantity)
            db.add(row)
        else:
            row.quantity = quantity
        db.flush()

    def holders(self, db: Session, asset_id: str) -> List[Tuple[str, int]]:
        rows = db.execute(
            select(HolderBalance.holder, HolderBalance.quantity)
            .where(HolderBalance.asset_id == asset_id)
            .order_by(HolderBalance.holder.asc())
        ).all()
        return [(holder, quantity) for holder, quantity in rows]

    def total_held(self, db: Session, asset_id: str) -> int:
        total = db.execute(
            select(func.coalesce(func.sum(HolderBalance.quantity), 0))
            .where(HolderBalance.asset_id == asset_id)
        ).scalar_one()
        return int(total)
