"""Unit tests for ledger documents, repositories and store gateways"""

import json
import httpx
import pytest
from fastapi.testclient import TestClient
from mocks.kvs_server.main import app as kvs_app, STORES
from mt_gateway.domain.exceptions import (
    AccountNotFoundError,
    LedgerCorruptionError,
    LedgerUnavailableError,
    MalformedInputError,
)
from mt_gateway.domain.models import AccountKey
from mt_gateway.domain.transfers import execute_transfer
from mt_gateway.infrastructure.ledger.documents import (
    AccountDocument,
    UserDetailsDocument,
    parse_account_key,
    serialize_account_key,
)
from mt_gateway.infrastructure.ledger.gateway import HttpLedgerGateway, SqlLedgerGateway
from mt_gateway.infrastructure.ledger.repositories import LedgerAccountRepository, LedgerUserRepository


def test_serialize_account_key_matches_stored_format(debit_key: AccountKey):
    assert serialize_account_key(debit_key) == (
        '{"holderBic":"BANKDEFF","ownerBic":"BANKBEBB","currency":"USD","type":"nostro"}'
    )


def test_parse_account_key(debit_key: AccountKey):
    text = '{"type":"nostro","currency":"USD","ownerBic":"BANKBEBB","holderBic":"BANKDEFF"}'
    assert parse_account_key(text) == debit_key


def test_parse_account_key_rejects_garbage():
    with pytest.raises(MalformedInputError):
        parse_account_key("not json")


def test_account_document_field_names(gateway, seed_ledger, mt103_message, debit_key):
    """Stored account JSON keeps the original camelCase names and order"""
    seed_ledger(gateway)
    execute_transfer(
        mt103_message,
        "user-alice",
        LedgerAccountRepository(gateway),
        LedgerUserRepository(gateway),
        transaction_id="tx-1",
    )

    stored = json.loads(gateway.get(serialize_account_key(debit_key)))
    assert list(stored) == ["amount", "currency", "type", "date", "number", "transactions"]
    assert list(stored["transactions"][0]) == [
        "transactionId",
        "sender",
        "receiver",
        "senderAccountKey",
        "receiverAccountKey",
        "fee",
        "amount",
        "details",
        "status",
        "comment",
        "time",
    ]
    assert list(stored["transactions"][0]["details"]) == ["inputMessage", "outputMessage"]


def test_documents_tolerate_nulls_and_unknown_fields():
    account = AccountDocument.model_validate_json(
        '{"amount":"1.00","currency":"USD","transactions":null,"branch":"X"}'
    ).to_domain()

    assert account.amount == "1.00"
    assert account.transactions == ()
    assert account.date == ""


def test_user_details_document():
    user = UserDetailsDocument.model_validate_json(
        '{"password":"p","permissions":[{"accountKey":{"type":"account","holder":"H","owner":"O",'
        '"currency":"USD","accountType":"nostro"},"access":"write"}]}'
    ).to_domain()

    assert user.permissions[0].key.account_type == "nostro"
    assert user.permissions[0].key.holder == "H"
    assert user.permissions[0].access == "write"


def test_account_repository_get_missing(gateway, debit_key):
    repo = LedgerAccountRepository(gateway)

    with pytest.raises(AccountNotFoundError):
        repo.get(debit_key)
    assert repo.find(debit_key) is None
    with pytest.raises(LedgerCorruptionError):
        repo.load(debit_key)


def test_account_repository_undecodable(gateway, debit_key):
    gateway.entries[serialize_account_key(debit_key)] = b"[1, 2, 3]"
    repo = LedgerAccountRepository(gateway)

    assert repo.find(debit_key) is None
    with pytest.raises(LedgerCorruptionError):
        repo.get(debit_key)


def test_user_repository_missing(gateway):
    assert LedgerUserRepository(gateway).find_by_token("nobody") is None


def test_sql_gateway_put_get_overwrite(sql_gateway: SqlLedgerGateway):
    assert sql_gateway.get("k") is None

    sql_gateway.put("k", b'{"v":1}')
    sql_gateway.put("k", b'{"v":2}')

    assert sql_gateway.get("k") == b'{"v":2}'


def test_sql_gateway_store_isolation(db):
    first = SqlLedgerGateway(db, store_id="store-a")
    second = SqlLedgerGateway(db, store_id="store-b")

    first.put("k", b"a")

    assert first.get("k") == b"a"
    assert second.get("k") is None


def test_http_gateway_against_mock_kvs():
    STORES.clear()
    gateway = HttpLedgerGateway(base_url="http://testserver", store_id="s1", client=TestClient(kvs_app))

    assert gateway.get('{"holderBic":"A"}') is None
    gateway.put('{"holderBic":"A"}', b'{"amount":"1.00"}')

    assert gateway.get('{"holderBic":"A"}') == b'{"amount":"1.00"}'
    assert STORES["s1"]['{"holderBic":"A"}'] == b'{"amount":"1.00"}'


def test_http_gateway_server_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    gateway = HttpLedgerGateway(base_url="http://kvs", store_id="s1", client=httpx.Client(transport=transport))

    with pytest.raises(LedgerUnavailableError):
        gateway.get("k")
    with pytest.raises(LedgerUnavailableError):
        gateway.put("k", b"v")


def test_http_gateway_unreachable():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    gateway = HttpLedgerGateway(base_url="http://kvs", store_id="s1", client=httpx.Client(transport=httpx.MockTransport(refuse)))

    with pytest.raises(LedgerUnavailableError):
        gateway.get("k")
