import pytest

from asset_ledger.core.config import get_settings
from asset_ledger.core.errors import ErrorKind, LedgerError
from asset_ledger.core.types import LifecycleState
from asset_ledger.services import asset_ledger_service

ADMIN = get_settings().administrator
ORIGINATOR = "wallet_1"
OUTSIDER = "wallet_4"


def enroll(ledger, db, at, asset_id="resource-a001-uuid", caller=ORIGINATOR):
    return ledger.enroll(
        db,
        caller=caller,
        at=at,
        asset_id=asset_id,
        metadata_uri="ipfs://bafk2312xyz",
        integrity_hash="sha256hash128bit",
    )


def test_enroll_creates_pending_record(db, ledger):
    asset = enroll(ledger, db, at=7)

    assert asset.id == "resource-a001-uuid"
    assert asset.state == LifecycleState.PENDING
    assert asset.lifecycle_state == 1
    assert asset.originator == ORIGINATOR
    assert asset.created_at == 7
    assert asset.modified_at == 7
    assert asset.reviewer is None
    assert asset.reviewed_at is None
    assert asset.decommissioned is False
    assert ledger.get_stats(db).asset_count == 1


def test_duplicate_enroll_fails_for_any_caller(db, ledger):
    enroll(ledger, db, at=1)

    for caller in (ORIGINATOR, OUTSIDER, ADMIN):
        with pytest.raises(LedgerError) as exc:
            enroll(ledger, db, at=2, caller=caller)
        assert exc.value.kind == ErrorKind.ASSET_EXISTS
        assert exc.value.code == 101

    assert ledger.get_asset(db, "resource-a001-uuid").originator == ORIGINATOR
    assert ledger.get_stats(db).asset_count == 1


def test_amend_updates_uri_and_modified_at_only(db, ledger):
    enroll(ledger, db, at=1)

    asset = ledger.amend(
        db, caller=ORIGINATOR, at=5, asset_id="resource-a001-uuid", metadata_uri="ipfs://new"
    )

    assert asset.metadata_uri == "ipfs://new"
    assert asset.modified_at == 5
    assert asset.created_at == 1
    assert asset.integrity_hash == "sha256hash128bit"
    assert asset.originator == ORIGINATOR


def test_amend_missing_asset(db, ledger):
    with pytest.raises(LedgerError) as exc:
        ledger.amend(db, caller=ORIGINATOR, at=1, asset_id="nope", metadata_uri="x")
    assert exc.value.kind == ErrorKind.NOT_FOUND


def test_amend_by_non_originator_is_unauthorized(db, ledger):
    enroll(ledger, db, at=1)

    for caller in (OUTSIDER, ADMIN):
        with pytest.raises(LedgerError) as exc:
            ledger.amend(
                db, caller=caller, at=2, asset_id="resource-a001-uuid", metadata_uri="x"
            )
        assert exc.value.kind == ErrorKind.UNAUTHORIZED

    assert ledger.get_asset(db, "resource-a001-uuid").metadata_uri == "ipfs://bafk2312xyz"


def test_amend_decommissioned_asset(db, ledger):
    enroll(ledger, db, at=1)
    ledger.decommission(db, caller=ORIGINATOR, at=2, asset_id="resource-a001-uuid")

    with pytest.raises(LedgerError) as exc:
        ledger.amend(
            db, caller=ORIGINATOR, at=3, asset_id="resource-a001-uuid", metadata_uri="x"
        )
    assert exc.value.kind == ErrorKind.DECOMMISSIONED


def test_amend_checks_originator_before_decommission_flag(db, ledger):
    enroll(ledger, db, at=1)
    ledger.decommission(db, caller=ORIGINATOR, at=2, asset_id="resource-a001-uuid")

    with pytest.raises(LedgerError) as exc:
        ledger.amend(db, caller=OUTSIDER, at=3, asset_id="resource-a001-uuid", metadata_uri="x")
    assert exc.value.kind == ErrorKind.UNAUTHORIZED


def test_get_asset_missing(db, ledger):
    with pytest.raises(LedgerError) as exc:
        ledger.get_asset(db, "missing")
    assert exc.value.kind == ErrorKind.NOT_FOUND


def test_originator_rights_come_from_access_policy(db, ledger, monkeypatch):
    enroll(ledger, db, at=1)
    monkeypatch.setattr(asset_ledger_service, "is_originator", lambda db, caller, asset_id: False)

    with pytest.raises(LedgerError) as exc:
        ledger.amend(db, caller=ORIGINATOR, at=2, asset_id="resource-a001-uuid", metadata_uri="x")
    assert exc.value.kind == ErrorKind.UNAUTHORIZED
