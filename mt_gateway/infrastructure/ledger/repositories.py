"""Data access layer for account and user records in the ledger store"""

import logging
from typing import Optional
from pydantic import ValidationError
from mt_gateway.domain.exceptions import AccountNotFoundError, LedgerCorruptionError
from mt_gateway.domain.models import AccountKey, AccountRecord, UserDetails
from mt_gateway.infrastructure.ledger.documents import AccountDocument, UserDetailsDocument, serialize_account_key
from mt_gateway.infrastructure.ledger.gateway import LedgerGateway


class LedgerAccountRepository:
    """Repository for account records"""

    def __init__(self, gateway: LedgerGateway):
        self.gateway = gateway

    def get(self, key: AccountKey) -> AccountRecord:
        """
        Fetch and decode an account.

        Raises:
            AccountNotFoundError: No record stored under the key
            LedgerCorruptionError: Stored record is not a valid account document
        """
        store_key = serialize_account_key(key)
        raw = self.gateway.get(store_key)
        if raw is None:
            raise AccountNotFoundError(f"Account {store_key} not found")
        try:
            return AccountDocument.model_validate_json(raw).to_domain()
        except ValidationError as e:
            raise LedgerCorruptionError(f"Account {store_key} is not a valid record: {e}") from e

    def find(self, key: AccountKey) -> Optional[AccountRecord]:
        """Fetch an account; absent or undecodable records read as None"""
        try:
            return self.get(key)
        except (AccountNotFoundError, LedgerCorruptionError) as e:
            logging.warning(f"Account lookup failed: {e}")
            return None

    def load(self, key: AccountKey) -> AccountRecord:
        """Fetch an account that must exist; a missing record counts as corruption"""
        try:
            return self.get(key)
        except AccountNotFoundError as e:
            raise LedgerCorruptionError(str(e)) from e

    def save(self, key: AccountKey, record: AccountRecord) -> None:
        """Overwrite the whole account record"""
        document = AccountDocument.from_domain(record)
        self.gateway.put(serialize_account_key(key), document.model_dump_json(by_alias=True).encode("utf-8"))


class LedgerUserRepository:
    """Repository for caller records keyed by decoded auth token"""

    def __init__(self, gateway: LedgerGateway):
        self.gateway = gateway

    def find_by_token(self, token_key: str) -> Optional[UserDetails]:
        raw = self.gateway.get(token_key)
        if raw is None:
            return None
        try:
            return UserDetailsDocument.model_validate_json(raw).to_domain()
        except ValidationError as e:
            logging.warning(f"User record is not valid: {e}")
            return None
