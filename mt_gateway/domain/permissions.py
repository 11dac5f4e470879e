"""Permission matching for debit authorization"""

from typing import Sequence
from mt_gateway.domain.models import AccountKey, Permission


def permission_matches(permission: Permission, account_key: AccountKey) -> bool:
    key = permission.key
    return (
        key.currency == account_key.currency
        and key.holder == account_key.holder_bic
        and key.owner == account_key.owner_bic
        and key.account_type == account_key.type
    )


def is_transfer_allowed(permissions: Sequence[Permission], account_key: AccountKey) -> bool:
    """
    Decide whether a caller may debit the given account.

    Any single entry matching on currency, holder, owner and account type
    grants access. The access level is not inspected yet, and an empty
    permission list never grants access.
    """
    return any(permission_matches(p, account_key) for p in permissions)
