"""Domain models - pure Python dataclasses representing ledger and message entities"""

from dataclasses import dataclass, field
from typing import List, Tuple

STATUS_SUCCESS = "Success"
STATUS_FAILURE = "Failure"

ACCOUNT_TYPE_NOSTRO = "nostro"
ACCOUNT_TYPE_VOSTRO = "vostro"


@dataclass(frozen=True)
class AccountKey:
    """Composite lookup key of one ledger account"""

    holder_bic: str
    owner_bic: str
    currency: str
    type: str  # "nostro" or "vostro"


@dataclass(frozen=True)
class Organization:
    """Institution identity paired with an account identifier"""

    bic: str
    account: str


@dataclass(frozen=True)
class TransactionDetails:
    """Inbound message and the reply rendered for it"""

    input_message: str
    output_message: str = ""


@dataclass(frozen=True)
class Transaction:
    """Completed transfer attempt, appended to both account histories"""

    transaction_id: str
    sender: Organization
    receiver: Organization
    sender_account_key: AccountKey
    receiver_account_key: AccountKey
    fee: str
    amount: str
    details: TransactionDetails
    status: str  # "Success" or "Failure"
    comment: str
    time: str


@dataclass(frozen=True)
class AccountRecord:
    """Ledger account as stored; amount is the balance as decimal text"""

    amount: str
    currency: str
    type: str
    date: str
    number: str
    transactions: Tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class PermissionKey:
    """Account selector inside a permission entry"""

    type: str
    holder: str
    owner: str
    currency: str
    account_type: str


@dataclass(frozen=True)
class Permission:
    key: PermissionKey
    access: str


@dataclass(frozen=True)
class UserDetails:
    """Caller record stored under the decoded auth token"""

    password: str
    permissions: Tuple[Permission, ...] = ()


@dataclass(frozen=True)
class TransferRequest:
    """Decoded transfer instruction; absent or malformed fields are empty strings"""

    sender_bic: str
    receiver_bic: str
    intermediary_bic: str
    credit_account: str
    benefit_account: str
    currency: str
    amount: str
    fee: str


@dataclass(frozen=True)
class Transfer:
    """Transfer summary shown in a transaction view"""

    sender: Organization
    receiver: Organization
    amount: str
    currency: str


@dataclass(frozen=True)
class AccountState:
    amount: str
    currency: str


@dataclass(frozen=True)
class TransactionView:
    """Client-facing projection of one stored transaction"""

    id: str
    transfer: Transfer
    time: str
    status: str
    comment: str
    account_state: AccountState
    details: TransactionDetails


@dataclass(frozen=True)
class TransactionsView:
    account_state: AccountState
    transactions: List[TransactionView] = field(default_factory=list)
