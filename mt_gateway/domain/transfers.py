"""Transfer execution - validates an MT transfer, renders the reply and commits both accounts"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional, Tuple
from mt_gateway.domain.exceptions import LedgerCorruptionError, LedgerUnavailableError, LedgerWriteError
from mt_gateway.domain.messages import decode_transfer_request
from mt_gateway.domain.models import (
    ACCOUNT_TYPE_NOSTRO,
    ACCOUNT_TYPE_VOSTRO,
    STATUS_FAILURE,
    STATUS_SUCCESS,
    AccountKey,
    AccountRecord,
    Organization,
    Transaction,
    TransactionDetails,
    TransferRequest,
)
from mt_gateway.domain.money import can_transfer, format_balance, parse_amount, parse_fee
from mt_gateway.domain.permissions import is_transfer_allowed
from mt_gateway.domain.rendering import render_failure, render_success
from mt_gateway.domain.repositories import AccountRepository, UserRepository

COMMENT_NO_SENDER_ACCOUNT = "Unable to get sender account"
COMMENT_NO_USER = "Unable to get user by the token"
COMMENT_NO_PERMISSION = "User doesn't have the permission for the action"
COMMENT_INSUFFICIENT_FUNDS = "Unable to transfer the requested amount"


class TransferStage(str, Enum):
    """Furthest point a transfer reached"""

    RENDERED = "rendered"
    COMMITTED = "committed"


@dataclass(frozen=True)
class TransferOutcome:
    """Result of one transfer invocation"""

    transaction: Transaction
    stage: TransferStage

    @property
    def status(self) -> str:
        return self.transaction.status

    @property
    def comment(self) -> str:
        return self.transaction.comment

    @property
    def committed(self) -> bool:
        return self.stage == TransferStage.COMMITTED

    @property
    def status_line(self) -> str:
        return f"Transaction status: {self.status}; Comment: {self.comment}"


def utc_timestamp() -> str:
    """RFC 3339 UTC timestamp with second precision"""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def derive_account_keys(request: TransferRequest) -> Tuple[AccountKey, AccountKey]:
    """
    Derive the debit and credit account keys for a transfer.

    Both accounts are held by the message receiver:
    - debit: the sender's nostro account (owner = sender BIC)
    - credit: the intermediary's vostro account (owner = intermediary BIC)
    """
    debit_key = AccountKey(
        holder_bic=request.receiver_bic,
        owner_bic=request.sender_bic,
        currency=request.currency,
        type=ACCOUNT_TYPE_NOSTRO,
    )
    credit_key = AccountKey(
        holder_bic=request.receiver_bic,
        owner_bic=request.intermediary_bic,
        currency=request.currency,
        type=ACCOUNT_TYPE_VOSTRO,
    )
    return debit_key, credit_key


def _find_debit_account(accounts: AccountRepository, key: AccountKey) -> Optional[AccountRecord]:
    try:
        account = accounts.find(key)
    except LedgerUnavailableError as e:
        logging.warning(f"Ledger unavailable while fetching sender account: {e}")
        return None

    if account is None or (account.amount == "" and account.currency == ""):
        return None
    return account


def validate_transfer(
    request: TransferRequest,
    debit_key: AccountKey,
    debit_account: AccountRecord,
    users: UserRepository,
    user_key: str,
) -> Tuple[str, str]:
    """
    Run the caller and funds checks in order; the first failure decides the comment.

    Checks stop at the first failure, so a caller without permission is
    reported as such even when funds are also short. (Running every check and
    keeping the last failure would let insufficient funds overwrite a missing
    user or permission.)

    Returns: (status, comment)
    """
    try:
        user = users.find_by_token(user_key)
    except LedgerUnavailableError as e:
        logging.warning(f"Ledger unavailable while fetching user: {e}")
        user = None

    if user is None:
        return STATUS_FAILURE, COMMENT_NO_USER

    if not is_transfer_allowed(user.permissions, debit_key):
        return STATUS_FAILURE, COMMENT_NO_PERMISSION

    if not can_transfer(debit_account.amount, request.amount, request.fee):
        return STATUS_FAILURE, COMMENT_INSUFFICIENT_FUNDS

    return STATUS_SUCCESS, ""


def _apply_balances(
    request: TransferRequest,
    debit: AccountRecord,
    credit: AccountRecord,
) -> Tuple[str, str]:
    """New (debit, credit) balances: debit loses amount + fee, credit gains amount"""
    amount = parse_amount(request.amount)
    fee = parse_fee(request.fee)
    debit_balance = parse_amount(debit.amount)
    credit_balance = parse_amount(credit.amount) if credit.amount else Decimal("0")

    if amount is None or fee is None:
        # Already validated; only a changed request could get here
        raise LedgerCorruptionError(f"Transfer amount no longer parses: {request.amount!r} / {request.fee!r}")
    if debit_balance is None or credit_balance is None:
        raise LedgerCorruptionError("Stored account balance is not a decimal number")

    return format_balance(debit_balance - amount - fee), format_balance(credit_balance + amount)


def commit_transfer(
    transaction: Transaction,
    request: TransferRequest,
    accounts: AccountRepository,
) -> None:
    """
    Append the transaction to both accounts and write them, debit first.

    On Success the balances move as well. The two writes are independent and
    not atomic: if the credit write fails the debit side is already stored,
    and LedgerWriteError reports which side was applied.
    """
    debit_key = transaction.sender_account_key
    credit_key = transaction.receiver_account_key

    debit = accounts.load(debit_key)
    credit = accounts.load(credit_key)

    if transaction.status == STATUS_SUCCESS:
        debit_amount, credit_amount = _apply_balances(request, debit, credit)
        debit = replace(debit, amount=debit_amount)
        credit = replace(credit, amount=credit_amount)

    debit = replace(debit, transactions=debit.transactions + (transaction,))
    credit = replace(credit, transactions=credit.transactions + (transaction,))

    try:
        accounts.save(debit_key, debit)
    except LedgerUnavailableError as e:
        raise LedgerWriteError(f"Debit account write failed: {e}", applied=[]) from e

    try:
        accounts.save(credit_key, credit)
    except LedgerUnavailableError as e:
        raise LedgerWriteError(f"Credit account write failed after debit was stored: {e}", applied=["debit"]) from e


def execute_transfer(
    message: str,
    user_key: str,
    accounts: AccountRepository,
    users: UserRepository,
    transaction_id: str,
    now: Callable[[], str] = utc_timestamp,
) -> TransferOutcome:
    """
    Main entry point: decode, validate, render and commit one MT transfer.

    Flow:
    1. Decode the transfer request and derive account keys
    2. Fetch the sender (debit) account; if missing, fail without persisting
    3. Check caller permissions and available funds
    4. Render the onward message or the MT199 notice
    5. Update balances on Success, append the transaction to both accounts

    Raises:
        LedgerCorruptionError: account records unreadable during commit
        LedgerWriteError: an account write failed during commit
    """
    request = decode_transfer_request(message)
    debit_key, credit_key = derive_account_keys(request)

    def build_transaction(status: str, comment: str, output_message: str) -> Transaction:
        return Transaction(
            transaction_id=transaction_id,
            sender=Organization(bic=request.sender_bic, account=request.credit_account),
            receiver=Organization(bic=request.intermediary_bic, account=request.benefit_account),
            sender_account_key=debit_key,
            receiver_account_key=credit_key,
            fee=request.fee,
            amount=request.amount,
            details=TransactionDetails(input_message=message, output_message=output_message),
            status=status,
            comment=comment,
            time=now(),
        )

    debit_account = _find_debit_account(accounts, debit_key)
    if debit_account is None:
        output = render_failure(request, transaction_id, COMMENT_NO_SENDER_ACCOUNT)
        transaction = build_transaction(STATUS_FAILURE, COMMENT_NO_SENDER_ACCOUNT, output)
        return TransferOutcome(transaction=transaction, stage=TransferStage.RENDERED)

    status, comment = validate_transfer(request, debit_key, debit_account, users, user_key)

    if status == STATUS_SUCCESS:
        output = render_success(message, request)
    else:
        output = render_failure(request, transaction_id, comment)
    transaction = build_transaction(status, comment, output)

    commit_transfer(transaction, request, accounts)
    return TransferOutcome(transaction=transaction, stage=TransferStage.COMMITTED)
