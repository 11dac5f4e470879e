"""Client-facing projection of an account's transaction history"""

from mt_gateway.domain.models import (
    AccountRecord,
    AccountState,
    Transaction,
    TransactionView,
    TransactionsView,
    Transfer,
)


def project_transaction(transaction: Transaction, state: AccountState) -> TransactionView:
    return TransactionView(
        id=transaction.transaction_id,
        transfer=Transfer(
            sender=transaction.sender,
            receiver=transaction.receiver,
            amount=transaction.amount,
            currency=transaction.sender_account_key.currency,
        ),
        time=transaction.time,
        status=transaction.status,
        comment=transaction.comment,
        account_state=state,
        details=transaction.details,
    )


def project_transactions(account: AccountRecord) -> TransactionsView:
    """
    Map stored transactions to views, oldest first.

    Every view carries the account's current balance, not the balance at the
    time of the transaction.
    """
    state = AccountState(amount=account.amount, currency=account.currency)
    return TransactionsView(
        account_state=state,
        transactions=[project_transaction(t, state) for t in account.transactions],
    )
