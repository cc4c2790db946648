import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# FORCE model registration
import asset_ledger.models  # noqa

from asset_ledger.db.base import Base
from asset_ledger.db.session import get_db
from asset_ledger.core.config import get_settings
from asset_ledger.core.security import create_access_token
from asset_ledger.main import create_app
from asset_ledger.services.asset_ledger_service import AssetLedgerService


ADMIN = get_settings().administrator
ORIGINATOR = "wallet_1"
REVIEWER = "wallet_2"
HOLDER = "wallet_3"
OUTSIDER = "wallet_4"


@pytest.fixture(scope="function")
def engine():
    # One private in-memory database per test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def ledger():
    return AssetLedgerService(administrator=ADMIN)


@pytest.fixture
def clock():
    """Logical block heights, one per operation."""
    return itertools.count(1)


@pytest.fixture
def approved_asset(db, ledger, clock):
    ledger.enroll(
        db,
        caller=ORIGINATOR,
        at=next(clock),
        asset_id="A",
        metadata_uri="ipfs://bafk2312xyz",
        integrity_hash="sha256hash128bit",
    )
    ledger.grant_reviewer(db, caller=ADMIN, at=next(clock), subject=REVIEWER)
    ledger.assess(db, caller=REVIEWER, at=next(clock), asset_id="A", approve=True)
    return "A"


@pytest.fixture
def active_asset(db, ledger, clock, approved_asset):
    ledger.issue(
        db,
        caller=ORIGINATOR,
        at=next(clock),
        asset_id=approved_asset,
        supply=1_000_000,
        precision=8,
        token_uri="ipfs://token-meta",
    )
    return approved_asset


# ─────────── HTTP ───────────

@pytest.fixture
def client(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    app = create_app()

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth():
    def _headers(principal: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(principal)}"}

    return _headers
