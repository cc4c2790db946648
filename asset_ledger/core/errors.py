from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorKind(IntEnum):
    """
    Ledger error taxonomy.
    Codes are stable; callers match on them.
    """

    UNAUTHORIZED = 100
    ASSET_EXISTS = 101
    NOT_FOUND = 102
    UNVERIFIED = 103
    LOW_BALANCE = 104
    TXN_FAILED = 105  # reserved
    ALREADY_TOKENIZED = 106
    BAD_INPUT = 107
    VERIFIER_ONLY = 108
    DECOMMISSIONED = 109
    COMPLIANCE_BLOCK = 110
    INVALID_AMOUNT = 111


class LedgerError(Exception):
    """
    A rejected operation. Raised by the first failing guard, before any
    mutation, so the store is unchanged.
    """

    def __init__(self, kind: ErrorKind, detail: Optional[str] = None):
        self.kind = kind
        self.detail = detail or kind.name.replace("_", " ").lower()
        super().__init__(f"{kind.name} ({int(kind)}): {self.detail}")

    @property
    def code(self) -> int:
        return int(self.kind)


class LedgerInvariantError(RuntimeError):
    """
    Internal consistency violation (a programming error, not a caller error).
    """
