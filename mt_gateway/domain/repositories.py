"""Repository interfaces the transfer pipeline depends on"""

from typing import Optional, Protocol
from mt_gateway.domain.models import AccountKey, AccountRecord, UserDetails


class AccountRepository(Protocol):
    """Account records keyed by AccountKey"""

    def find(self, key: AccountKey) -> Optional[AccountRecord]:
        """Return the record, or None if it is absent or cannot be decoded"""
        ...

    def load(self, key: AccountKey) -> AccountRecord:
        """Return the record; raise LedgerCorruptionError if it is absent or cannot be decoded"""
        ...

    def save(self, key: AccountKey, record: AccountRecord) -> None:
        ...


class UserRepository(Protocol):
    """Caller records keyed by the decoded auth token"""

    def find_by_token(self, token_key: str) -> Optional[UserDetails]:
        ...
