import pytest

from asset_ledger.core.config import get_settings
from asset_ledger.core.errors import ErrorKind, LedgerError
from asset_ledger.core.types import MAX_PRECISION, MAX_QUANTITY, LifecycleState
from asset_ledger.services import asset_ledger_service

ADMIN = get_settings().administrator
ORIGINATOR = "wallet_1"
REVIEWER = "wallet_2"
OUTSIDER = "wallet_4"


def issue(ledger, db, at, asset_id="A", caller=ORIGINATOR, supply=5_000_000, precision=6):
    return ledger.issue(
        db,
        caller=caller,
        at=at,
        asset_id=asset_id,
        supply=supply,
        precision=precision,
        token_uri="uri",
    )


def test_originator_issues_after_approval(db, ledger, approved_asset):
    spec = issue(ledger, db, at=10)

    assert spec.supply == 5_000_000
    assert spec.precision == 6
    assert spec.token_uri == "uri"
    assert spec.activated_at == 10

    asset = ledger.get_asset(db, approved_asset)
    assert asset.state == LifecycleState.ACTIVE
    assert asset.lifecycle_state == 4
    assert ledger.get_balance(db, approved_asset, ORIGINATOR) == 5_000_000
    assert ledger.get_token_spec(db, approved_asset).supply == 5_000_000


def test_issue_missing_asset(db, ledger):
    with pytest.raises(LedgerError) as exc:
        issue(ledger, db, at=1, asset_id="missing")
    assert exc.value.kind == ErrorKind.NOT_FOUND


def test_non_originator_cannot_issue(db, ledger, approved_asset):
    for caller in (OUTSIDER, ADMIN, REVIEWER):
        with pytest.raises(LedgerError) as exc:
            issue(ledger, db, at=10, caller=caller)
        assert exc.value.kind == ErrorKind.UNAUTHORIZED

    assert ledger.get_asset(db, approved_asset).state == LifecycleState.APPROVED
    assert ledger.get_balance(db, approved_asset, OUTSIDER) == 0


def test_pending_asset_is_unverified(db, ledger):
    ledger.enroll(db, caller=ORIGINATOR, at=1, asset_id="A", metadata_uri="u", integrity_hash="h")

    with pytest.raises(LedgerError) as exc:
        issue(ledger, db, at=2)
    assert exc.value.kind == ErrorKind.UNVERIFIED


def test_declined_asset_is_unverified(db, ledger):
    ledger.enroll(db, caller=ORIGINATOR, at=1, asset_id="A", metadata_uri="u", integrity_hash="h")
    ledger.grant_reviewer(db, caller=ADMIN, at=2, subject=REVIEWER)
    ledger.assess(db, caller=REVIEWER, at=3, asset_id="A", approve=False)

    with pytest.raises(LedgerError) as exc:
        issue(ledger, db, at=4)
    assert exc.value.kind == ErrorKind.UNVERIFIED
    assert exc.value.code == 103


def test_second_issue_is_already_tokenized(db, ledger, approved_asset):
    issue(ledger, db, at=10)

    with pytest.raises(LedgerError) as exc:
        issue(ledger, db, at=11, supply=1)
    assert exc.value.kind == ErrorKind.ALREADY_TOKENIZED
    assert exc.value.code == 106
    assert ledger.get_token_spec(db, approved_asset).supply == 5_000_000


def test_issue_after_decommission_is_still_already_tokenized(db, ledger, approved_asset):
    issue(ledger, db, at=10)
    ledger.decommission(db, caller=ORIGINATOR, at=11, asset_id=approved_asset)

    with pytest.raises(LedgerError) as exc:
        issue(ledger, db, at=12)
    assert exc.value.kind == ErrorKind.ALREADY_TOKENIZED


@pytest.mark.parametrize("supply", [0, -5, MAX_QUANTITY + 1])
def test_supply_out_of_range(db, ledger, approved_asset, supply):
    with pytest.raises(LedgerError) as exc:
        issue(ledger, db, at=10, supply=supply)
    assert exc.value.kind == ErrorKind.BAD_INPUT
    assert ledger.get_asset(db, approved_asset).state == LifecycleState.APPROVED


@pytest.mark.parametrize("precision", [-1, MAX_PRECISION + 1, 2**63])
def test_precision_out_of_range(db, ledger, approved_asset, precision):
    with pytest.raises(LedgerError) as exc:
        issue(ledger, db, at=10, precision=precision)
    assert exc.value.kind == ErrorKind.BAD_INPUT
    assert exc.value.code == 107
    assert ledger.get_asset(db, approved_asset).state == LifecycleState.APPROVED
    assert ledger.get_balance(db, approved_asset, ORIGINATOR) == 0


def test_max_precision_is_accepted(db, ledger, approved_asset):
    assert issue(ledger, db, at=10, precision=MAX_PRECISION).precision == MAX_PRECISION


def test_max_supply_is_accepted(db, ledger, approved_asset):
    spec = issue(ledger, db, at=10, supply=MAX_QUANTITY)
    assert spec.supply == MAX_QUANTITY
    assert ledger.get_balance(db, approved_asset, ORIGINATOR) == MAX_QUANTITY


def test_token_spec_requires_active_state(db, ledger, approved_asset):
    with pytest.raises(LedgerError) as exc:
        ledger.get_token_spec(db, approved_asset)
    assert exc.value.kind == ErrorKind.UNVERIFIED

    issue(ledger, db, at=10)
    assert ledger.get_token_spec(db, approved_asset).activated_at == 10

    ledger.decommission(db, caller=ADMIN, at=11, asset_id=approved_asset)
    with pytest.raises(LedgerError) as exc:
        ledger.get_token_spec(db, approved_asset)
    assert exc.value.kind == ErrorKind.UNVERIFIED


def test_token_spec_missing_asset(db, ledger):
    with pytest.raises(LedgerError) as exc:
        ledger.get_token_spec(db, "missing")
    assert exc.value.kind == ErrorKind.NOT_FOUND


def test_issue_rights_come_from_access_policy(db, ledger, approved_asset, monkeypatch):
    monkeypatch.setattr(asset_ledger_service, "is_originator", lambda db, caller, asset_id: caller == OUTSIDER)

    with pytest.raises(LedgerError) as exc:
        issue(ledger, db, at=10)
    assert exc.value.kind == ErrorKind.UNAUTHORIZED

    spec = issue(ledger, db, at=11, caller=OUTSIDER)
    assert ledger.get_balance(db, approved_asset, OUTSIDER) == spec.supply
