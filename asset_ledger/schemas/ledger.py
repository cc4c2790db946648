from __future__ import annotations

from typing import List

from pydantic import BaseModel

from asset_ledger.schemas.assets import TransferRecordResponse


class TransferLogResponse(BaseModel):
    """
    Transfer log slice, in sequence order.
    """
    transfers: List[TransferRecordResponse]


class ChainVerifyResponse(BaseModel):
    valid: bool
    entries: int


class LedgerStatsResponse(BaseModel):
    asset_count: int
    reviewer_count: int
    transfer_count: int
    block_height: int
