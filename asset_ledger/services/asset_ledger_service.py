# asset_ledger/services/asset_ledger_service.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from sqlalchemy.orm import Session

from asset_ledger.core.errors import ErrorKind, LedgerError, LedgerInvariantError
from asset_ledger.core.types import MAX_PRECISION, MAX_QUANTITY, LifecycleState
from asset_ledger.models.asset_record import AssetRecord
from asset_ledger.models.reviewer_grant import ReviewerGrant
from asset_ledger.models.token_spec import TokenSpec
from asset_ledger.models.transfer_record import TransferRecord
from asset_ledger.policies.access import (
    can_decommission,
    is_administrator,
    is_enabled_reviewer,
    is_originator,
)
from asset_ledger.services.balance_service import BalanceLedger
from asset_ledger.services.counter_service import (
    ASSET_COUNT,
    REVIEWER_COUNT,
    CounterService,
)
from asset_ledger.services.registry_service import AssetRegistry
from asset_ledger.services.reviewer_service import ReviewerRoster
from asset_ledger.services.tokenization_service import TokenizationLedger
from asset_ledger.services.transfer_log_service import TransferLogService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerStats:
    asset_count: int
    reviewer_count: int
    transfer_count: int


def _transfer_compliant(asset: AssetRecord, sender_balance: int, amount: int) -> bool:
    return (
        asset.state == LifecycleState.ACTIVE
        and not asset.decommissioned
        and amount > 0
        and sender_balance >= amount
    )


class AssetLedgerService:
    """
    Public operations of the asset ledger.

    Every mutating operation:
    - receives the authenticated caller and the logical time explicitly
    - runs its guards in a fixed order and raises the first failing one
    - commits all of its writes together, or none of them
    """

    def __init__(self, administrator: str):
        self.administrator = administrator
        self.counters = CounterService()
        self.registry = AssetRegistry()
        self.tokens = TokenizationLedger()
        self.balances = BalanceLedger()
        self.reviewers = ReviewerRoster()
        self.log = TransferLogService(self.counters)

    # ─────────────────────────────────────────────
    # INTERNAL HELPERS
    # ─────────────────────────────────────────────

    @contextmanager
    def _atomic(self, db: Session, op: str) -> Iterator[None]:
        try:
            yield
            db.commit()
        except LedgerError as exc:
            db.rollback()
            logger.info("[ledger] %s rejected kind=%s", op, exc.kind.name)
            raise
        except Exception:
            db.rollback()
            logger.exception("[ledger] %s failed", op)
            raise

    def _require_asset(self, db: Session, asset_id: str) -> AssetRecord:
        asset = self.registry.get_for_update(db, asset_id)
        if asset is None:
            raise LedgerError(ErrorKind.NOT_FOUND, f"Asset {asset_id} not found.")
        return asset

    # ─────────────────────────────────────────────
    # REGISTRATION & METADATA
    # ─────────────────────────────────────────────

    def enroll(
        self,
        db: Session,
        *,
        caller: str,
        at: int,
        asset_id: str,
        metadata_uri: str,
        integrity_hash: str,
    ) -> AssetRecord:
        with self._atomic(db, "enroll"):
            if self.registry.get(db, asset_id) is not None:
                raise LedgerError(ErrorKind.ASSET_EXISTS, f"Asset {asset_id} already enrolled.")

            asset = self.registry.create(
                db,
                asset_id=asset_id,
                originator=caller,
                metadata_uri=metadata_uri,
                integrity_hash=integrity_hash,
                at=at,
            )
            self.counters.increment(db, ASSET_COUNT)

        logger.info("[ledger] enroll asset=%s originator=%s at=%s", asset_id, caller, at)
        return asset

    def amend(
        self,
        db: Session,
        *,
        caller: str,
        at: int,
        asset_id: str,
        metadata_uri: str,
    ) -> AssetRecord:
        """
        Replace the metadata pointer. integrity_hash and originator never change.
        """
        with self._atomic(db, "amend"):
            asset = self._require_asset(db, asset_id)
            if not is_originator(db, caller, asset_id):
                raise LedgerError(ErrorKind.UNAUTHORIZED, "Only the originator may amend.")
            if asset.decommissioned:
                raise LedgerError(ErrorKind.DECOMMISSIONED, f"Asset {asset_id} is decommissioned.")

            self.registry.set_metadata(asset, metadata_uri=metadata_uri, at=at)

        logger.info("[ledger] amend asset=%s at=%s", asset_id, at)
        return asset

    # ─────────────────────────────────────────────
    # REVIEWER MANAGEMENT
    # ─────────────────────────────────────────────

    def grant_reviewer(self, db: Session, *, caller: str, at: int, subject: str) -> ReviewerGrant:
        with self._atomic(db, "grant_reviewer"):
            if not is_administrator(caller, self.administrator):
                raise LedgerError(ErrorKind.UNAUTHORIZED, "Only the administrator manages reviewers.")

            grant, created = self.reviewers.enable(db, subject, at=at)
            if created:
                self.counters.increment(db, REVIEWER_COUNT)

        logger.info("[ledger] grant_reviewer subject=%s new=%s", subject, created)
        return grant

    def revoke_reviewer(
        self, db: Session, *, caller: str, at: int, subject: str
    ) -> Optional[ReviewerGrant]:
        """
        Disable a reviewer. Decisions already recorded by them stand.
        Returns None when the subject was never granted.
        """
        with self._atomic(db, "revoke_reviewer"):
            if not is_administrator(caller, self.administrator):
                raise LedgerError(ErrorKind.UNAUTHORIZED, "Only the administrator manages reviewers.")

            grant = self.reviewers.disable(db, subject)

        logger.info("[ledger] revoke_reviewer subject=%s known=%s", subject, grant is not None)
        return grant

    # ─────────────────────────────────────────────
    # ASSESSMENT
    # ─────────────────────────────────────────────

    def assess(
        self,
        db: Session,
        *,
        caller: str,
        at: int,
        asset_id: str,
        approve: bool,
    ) -> AssetRecord:
        """
        Record a review decision.

        There is no PENDING-only guard: assessing an already reviewed asset
        overwrites the decision, reviewer and reviewed_at. Tokenized or
        decommissioned assets are refused so their state stays bound to
        their TokenSpec / decommission flag.
        """
        with self._atomic(db, "assess"):
            asset = self._require_asset(db, asset_id)
            if not is_enabled_reviewer(db, caller):
                raise LedgerError(ErrorKind.VERIFIER_ONLY, "Caller is not an enabled reviewer.")
            if asset.decommissioned:
                raise LedgerError(ErrorKind.DECOMMISSIONED, f"Asset {asset_id} is decommissioned.")
            if self.tokens.exists(db, asset_id):
                raise LedgerError(ErrorKind.ALREADY_TOKENIZED, f"Asset {asset_id} is tokenized.")

            self.registry.record_review(asset, reviewer=caller, approved=approve, at=at)

        logger.info(
            "[ledger] assess asset=%s reviewer=%s approved=%s", asset_id, caller, approve
        )
        return asset

    # ─────────────────────────────────────────────
    # TOKENIZATION
    # ─────────────────────────────────────────────

    def issue(
        self,
        db: Session,
        *,
        caller: str,
        at: int,
        asset_id: str,
        supply: int,
        precision: int,
        token_uri: str,
    ) -> TokenSpec:
        """
        Tokenize an approved asset and mint the full supply to the originator.
        One-shot per asset id.
        """
        with self._atomic(db, "issue"):
            asset = self._require_asset(db, asset_id)
            if not is_originator(db, caller, asset_id):
                raise LedgerError(ErrorKind.UNAUTHORIZED, "Only the originator may issue.")
            if self.tokens.exists(db, asset_id):
                raise LedgerError(ErrorKind.ALREADY_TOKENIZED, f"Asset {asset_id} is tokenized.")
            if asset.state != LifecycleState.APPROVED:
                raise LedgerError(ErrorKind.UNVERIFIED, f"Asset {asset_id} is not approved.")
            if not 0 < supply <= MAX_QUANTITY or not 0 <= precision <= MAX_PRECISION:
                raise LedgerError(ErrorKind.BAD_INPUT, "Supply or precision out of range.")

            self.registry.activate(asset)
            spec = self.tokens.create(
                db,
                asset_id=asset_id,
                supply=supply,
                precision=precision,
                token_uri=token_uri,
                at=at,
            )
            self.balances.set_balance(db, asset_id, caller, supply)

        logger.info("[ledger] issue asset=%s supply=%s issuer=%s", asset_id, supply, caller)
        return spec

    # ─────────────────────────────────────────────
    # TRANSFER
    # ─────────────────────────────────────────────

    def transfer(
        self,
        db: Session,
        *,
        caller: str,
        at: int,
        asset_id: str,
        recipient: str,
        amount: int,
    ) -> TransferRecord:
        """
        Move `amount` units from the caller to `recipient`.

        Guard order (first failure wins):
        NOT_FOUND, UNVERIFIED, DECOMMISSIONED, INVALID_AMOUNT, LOW_BALANCE,
        COMPLIANCE_BLOCK.
        """
        with self._atomic(db, "transfer"):
            asset = self._require_asset(db, asset_id)
            # A decommissioned asset is INACTIVE; it is reported as DECOMMISSIONED.
            if asset.state != LifecycleState.ACTIVE and not asset.decommissioned:
                raise LedgerError(ErrorKind.UNVERIFIED, f"Asset {asset_id} is not active.")
            if asset.decommissioned:
                raise LedgerError(ErrorKind.DECOMMISSIONED, f"Asset {asset_id} is decommissioned.")
            if amount <= 0:
                raise LedgerError(ErrorKind.INVALID_AMOUNT, "Amount must be positive.")

            sender_balance = self.balances.get_balance(db, asset_id, caller)
            if amount > sender_balance:
                raise LedgerError(ErrorKind.LOW_BALANCE, "Amount exceeds sender balance.")

            # Final re-check immediately before mutation
            if not _transfer_compliant(asset, sender_balance, amount):
                raise LedgerError(ErrorKind.COMPLIANCE_BLOCK, "Transfer failed compliance check.")

            self.balances.set_balance(db, asset_id, caller, sender_balance - amount)

            recipient_balance = self.balances.get_balance(db, asset_id, recipient)
            if recipient_balance + amount > MAX_QUANTITY:
                raise LedgerInvariantError(
                    f"Balance overflow for {recipient} on {asset_id}; supply conservation broken"
                )
            self.balances.set_balance(db, asset_id, recipient, recipient_balance + amount)

            record = self.log.append(
                db,
                asset_id=asset_id,
                sender=caller,
                receiver=recipient,
                quantity=amount,
                occurred_at=at,
            )

        logger.info(
            "[ledger] transfer asset=%s seq=%s from=%s to=%s amount=%s",
            asset_id, record.sequence, caller, recipient, amount,
        )
        return record

    # ─────────────────────────────────────────────
    # DECOMMISSIONING
    # ─────────────────────────────────────────────

    def decommission(self, db: Session, *, caller: str, at: int, asset_id: str) -> AssetRecord:
        """
        Retire an asset for good (originator or administrator).
        Balances and the TokenSpec are kept but frozen.
        """
        with self._atomic(db, "decommission"):
            asset = self._require_asset(db, asset_id)
            if not can_decommission(db, caller, asset_id, self.administrator):
                raise LedgerError(
                    ErrorKind.UNAUTHORIZED, "Only the originator or administrator may decommission."
                )
            if asset.decommissioned:
                raise LedgerError(ErrorKind.DECOMMISSIONED, f"Asset {asset_id} is decommissioned.")

            self.registry.deactivate(asset, at=at)

        logger.info("[ledger] decommission asset=%s by=%s at=%s", asset_id, caller, at)
        return asset

    # ─────────────────────────────────────────────
    # READ-ONLY QUERIES
    # ─────────────────────────────────────────────

    def get_asset(self, db: Session, asset_id: str) -> AssetRecord:
        asset = self.registry.get(db, asset_id)
        if asset is None:
            raise LedgerError(ErrorKind.NOT_FOUND, f"Asset {asset_id} not found.")
        return asset

    def get_token_spec(self, db: Session, asset_id: str) -> TokenSpec:
        asset = self.get_asset(db, asset_id)
        if asset.state != LifecycleState.ACTIVE:
            raise LedgerError(ErrorKind.UNVERIFIED, f"Asset {asset_id} is not active.")

        spec = self.tokens.get(db, asset_id)
        if spec is None:
            raise LedgerInvariantError(f"ACTIVE asset {asset_id} has no TokenSpec")
        return spec

    def get_balance(self, db: Session, asset_id: str, holder: str) -> int:
        return self.balances.get_balance(db, asset_id, holder)

    def check_transfer_eligible(
        self,
        db: Session,
        *,
        asset_id: str,
        sender: str,
        recipient: str,
        amount: int,
    ) -> bool:
        """
        Would `sender` -> `recipient` of `amount` pass the compliance check
        right now? The recipient does not affect the answer.
        """
        asset = self.registry.get(db, asset_id)
        if asset is None:
            return False
        return _transfer_compliant(
            asset, self.balances.get_balance(db, asset_id, sender), amount
        )

    def is_reviewer_enabled(self, db: Session, subject: str) -> bool:
        return is_enabled_reviewer(db, subject)

    def list_transfers(self, db: Session, *, asset_id: Optional[str] = None) -> list[TransferRecord]:
        return self.log.list_entries(db, asset_id=asset_id)

    def verify_transfer_log(self, db: Session) -> bool:
        return self.log.verify_chain(db)

    def get_stats(self, db: Session) -> LedgerStats:
        return LedgerStats(
            asset_count=self.counters.current(db, ASSET_COUNT),
            reviewer_count=self.counters.current(db, REVIEWER_COUNT),
            transfer_count=self.log.count(db),
        )
