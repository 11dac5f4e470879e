"""Ledger store gateways: raw key/value access to one store instance"""

from typing import Optional, Protocol
import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from mt_gateway.config import settings
from mt_gateway.domain.exceptions import LedgerUnavailableError
from mt_gateway.infrastructure.database.models import LedgerEntry
from mt_gateway.infrastructure.observability.metrics import ledger_failure_counter, ledger_latency_histogram


class LedgerGateway(Protocol):
    """Key/value access to the ledger store. Keys and values are UTF-8 JSON."""

    store_id: str

    def get(self, key: str) -> Optional[bytes]:
        """Return the stored value, or None if the key is absent"""
        ...

    def put(self, key: str, value: bytes) -> None:
        """Overwrite the value of one key; atomic per key only"""
        ...


class SqlLedgerGateway:
    """Ledger store kept in the ledger_entry table, partitioned by store id"""

    def __init__(self, db: Session, store_id: str | None = None):
        self.db = db
        self.store_id = store_id or settings.ledger_store_id

    def get(self, key: str) -> Optional[bytes]:
        try:
            with ledger_latency_histogram.labels(backend="sql", operation="get").time():
                entry = self.db.get(LedgerEntry, (self.store_id, key))
        except SQLAlchemyError as e:
            ledger_failure_counter.labels(operation="get").inc()
            raise LedgerUnavailableError(f"Ledger read failed: {e}") from e

        return entry.value if entry is not None else None

    def put(self, key: str, value: bytes) -> None:
        """Upsert and commit immediately so each put stands on its own"""
        try:
            with ledger_latency_histogram.labels(backend="sql", operation="put").time():
                entry = self.db.get(LedgerEntry, (self.store_id, key))
                if entry is None:
                    self.db.add(LedgerEntry(store_id=self.store_id, key=key, value=value))
                else:
                    entry.value = value
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            ledger_failure_counter.labels(operation="put").inc()
            raise LedgerUnavailableError(f"Ledger write failed: {e}") from e


class HttpLedgerGateway:
    """Client for a remote key/value ledger service"""

    def __init__(
        self,
        base_url: str | None = None,
        store_id: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        self.base_url = (base_url or settings.ledger_api_base).rstrip("/")
        self.store_id = store_id or settings.ledger_store_id
        self.timeout = timeout or settings.http_timeout_seconds
        self.client = client

    def _request(self, method: str, key: str, content: bytes | None = None) -> httpx.Response:
        url = f"{self.base_url}/kvs/{self.store_id}/entry"
        if self.client is not None:
            return self.client.request(method, url, params={"key": key}, content=content)
        with httpx.Client(timeout=self.timeout) as client:
            return client.request(method, url, params={"key": key}, content=content)

    def get(self, key: str) -> Optional[bytes]:
        """
        Fetch one value.

        Raises:
            LedgerUnavailableError: On timeout, network or non-404 HTTP errors
        """
        try:
            with ledger_latency_histogram.labels(backend="http", operation="get").time():
                response = self._request("GET", key)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return response.content

        except httpx.TimeoutException as e:
            ledger_failure_counter.labels(operation="get").inc()
            raise LedgerUnavailableError(f"Ledger API timeout after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            ledger_failure_counter.labels(operation="get").inc()
            raise LedgerUnavailableError(f"Ledger API error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            ledger_failure_counter.labels(operation="get").inc()
            raise LedgerUnavailableError(f"Ledger API unreachable: {e}") from e

    def put(self, key: str, value: bytes) -> None:
        try:
            with ledger_latency_histogram.labels(backend="http", operation="put").time():
                response = self._request("PUT", key, content=value)
            response.raise_for_status()

        except httpx.TimeoutException as e:
            ledger_failure_counter.labels(operation="put").inc()
            raise LedgerUnavailableError(f"Ledger API timeout after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            ledger_failure_counter.labels(operation="put").inc()
            raise LedgerUnavailableError(f"Ledger API error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            ledger_failure_counter.labels(operation="put").inc()
            raise LedgerUnavailableError(f"Ledger API unreachable: {e}") from e
