"""Pytest fixtures for testing"""

import json
import pytest
from typing import Callable, Dict, Generator, List, Optional
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from mt_gateway.api.dependencies import get_ledger_gateway
from mt_gateway.api.main import create_app
from mt_gateway.config import settings
from mt_gateway.domain.exceptions import LedgerUnavailableError
from mt_gateway.domain.models import AccountKey
from mt_gateway.infrastructure.database.models import Base
from mt_gateway.infrastructure.ledger.documents import serialize_account_key
from mt_gateway.infrastructure.ledger.gateway import SqlLedgerGateway
from mt_gateway.utils.encoding import encode_base64_text


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

SENDER_BIC = "BANKBEBB"
RECEIVER_BIC = "BANKDEFF"
INTERMEDIARY_BIC = "BANKUS33"
USER_KEY = "user-alice"

DEBIT_KEY = AccountKey(holder_bic=RECEIVER_BIC, owner_bic=SENDER_BIC, currency="USD", type="nostro")
CREDIT_KEY = AccountKey(holder_bic=RECEIVER_BIC, owner_bic=INTERMEDIARY_BIC, currency="USD", type="vostro")

MT103_MESSAGE = (
    "{1:F01BANKBEBBAXXX0000000000}{2:I103BANKDEFFXXXXN}{3:{108:MT103}}{4:\r\n"
    ":20:REF12345\r\n"
    ":23B:CRED\r\n"
    ":32A:180101USD100,00\r\n"
    ":50K:/12345678\r\n"
    "JOHN DOE\r\n"
    ":57A:BANKUS33\r\n"
    ":59A:/87654321\r\n"
    "BANKUS33\r\n"
    ":71G:USD5,00\r\n"
    "-}"
)

DEBIT_PERMISSION = {
    "accountKey": {
        "type": "account",
        "holder": RECEIVER_BIC,
        "owner": SENDER_BIC,
        "currency": "USD",
        "accountType": "nostro",
    },
    "access": "write",
}


class InMemoryLedgerGateway:
    """Dict-backed ledger store; put failures can be injected per key"""

    def __init__(self, store_id: str = "test-store"):
        self.store_id = store_id
        self.entries: Dict[str, bytes] = {}
        self.puts: List[str] = []
        self.failing_put_keys: set = set()

    def get(self, key: str) -> Optional[bytes]:
        return self.entries.get(key)

    def put(self, key: str, value: bytes) -> None:
        if key in self.failing_put_keys:
            raise LedgerUnavailableError(f"put rejected for {key}")
        self.entries[key] = value
        self.puts.append(key)


def account_json(amount: str, currency: str = "USD", type: str = "nostro", transactions: list | None = None) -> bytes:
    return json.dumps(
        {
            "amount": amount,
            "currency": currency,
            "type": type,
            "date": "2018-01-01",
            "number": "ACC-001",
            "transactions": transactions or [],
        }
    ).encode("utf-8")


def seed(
    gateway,
    debit_amount: str | None = "1000.00",
    credit_amount: str | None = "500.00",
    permissions: list | None = None,
    user: bool = True,
) -> None:
    """Store the standard debit/credit accounts and caller record"""
    if debit_amount is not None:
        gateway.put(serialize_account_key(DEBIT_KEY), account_json(debit_amount, type="nostro"))
    if credit_amount is not None:
        gateway.put(serialize_account_key(CREDIT_KEY), account_json(credit_amount, type="vostro"))
    if user:
        details = {"password": "secret", "permissions": [DEBIT_PERMISSION] if permissions is None else permissions}
        gateway.put(USER_KEY, json.dumps(details).encode("utf-8"))


def stored_account(gateway, key: AccountKey) -> dict:
    return json.loads(gateway.get(serialize_account_key(key)))


@pytest.fixture
def mt103_message() -> str:
    return MT103_MESSAGE


@pytest.fixture
def gateway() -> InMemoryLedgerGateway:
    return InMemoryLedgerGateway()


@pytest.fixture
def seed_ledger() -> Callable[..., None]:
    return seed


@pytest.fixture
def read_account() -> Callable[..., dict]:
    return stored_account


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def sql_gateway(db: Session) -> SqlLedgerGateway:
    return SqlLedgerGateway(db, store_id=settings.ledger_store_id)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with the ledger store on the test database"""
    app = create_app()

    def override_get_ledger_gateway():
        yield SqlLedgerGateway(db, store_id=settings.ledger_store_id)

    app.dependency_overrides[get_ledger_gateway] = override_get_ledger_gateway
    return TestClient(app)


@pytest.fixture
def auth_token() -> str:
    return encode_base64_text(USER_KEY)


@pytest.fixture
def debit_key() -> AccountKey:
    return DEBIT_KEY


@pytest.fixture
def credit_key() -> AccountKey:
    return CREDIT_KEY
