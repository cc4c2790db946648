from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from asset_ledger.schemas.primitives import (
    AssetId,
    IntegrityHash,
    NonNegInt,
    Precision,
    PrincipalId,
    Quantity,
    Uri,
)


# ─────────── REQUESTS ───────────

class EnrollRequest(BaseModel):
    asset_id: AssetId
    metadata_uri: Uri
    integrity_hash: IntegrityHash


class AmendRequest(BaseModel):
    metadata_uri: Uri


class AssessRequest(BaseModel):
    approve: bool


class IssueRequest(BaseModel):
    supply: Quantity
    precision: Precision
    token_uri: Uri


class TransferRequest(BaseModel):
    recipient: PrincipalId
    amount: Quantity


# ─────────── RESPONSES ───────────

class AssetStateResponse(BaseModel):
    """
    Result of enroll / amend / decommission.
    """
    asset_id: str
    state: int
    state_name: str


class AssessResponse(AssetStateResponse):
    approved: bool
    reviewer: str
    reviewed_at: int


class IssueResponse(AssetStateResponse):
    supply: int
    precision: Precision


class AssetResponse(BaseModel):
    asset_id: str
    originator: str
    state: int
    state_name: str
    reviewer: Optional[str] = None
    reviewed_at: Optional[int] = None
    metadata_uri: str
    integrity_hash: str
    created_at: int
    modified_at: int
    decommissioned: bool


class TokenSpecResponse(BaseModel):
    asset_id: str
    supply: int
    precision: Precision
    token_uri: str
    activated_at: int


class BalanceResponse(BaseModel):
    asset_id: str
    holder: str
    balance: NonNegInt


class EligibilityResponse(BaseModel):
    asset_id: str
    sender: str
    recipient: str
    amount: int
    eligible: bool


class TransferRecordResponse(BaseModel):
    sequence: int
    asset_id: str
    sender: str
    receiver: str
    quantity: int
    occurred_at: int
    prev_hash: str
    entry_hash: str


class ErrorResponse(BaseModel):
    error: str
    code: int
    detail: Optional[str] = None
