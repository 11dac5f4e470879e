"""POST /v1/query - read-only operations (account transaction history)"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from mt_gateway.api.v1.schemas import OperationRequest, TransactionsViewSchema
from mt_gateway.api.dependencies import check_argument_count, get_account_repository, get_request_id
from mt_gateway.infrastructure.ledger.documents import parse_account_key
from mt_gateway.infrastructure.ledger.repositories import LedgerAccountRepository
from mt_gateway.domain.views import project_transactions
from mt_gateway.domain.exceptions import (
    AccountNotFoundError,
    IncorrectArgumentsError,
    LedgerCorruptionError,
    LedgerUnavailableError,
    MalformedInputError,
    UnsupportedOperationError,
)
from mt_gateway.utils.encoding import decode_base64_text

router = APIRouter()

LIST_TRANSACTIONS_PARAMETERS = ("authToken", "accountId")


@router.post("/query", response_model=TransactionsViewSchema)
def query(
    body: OperationRequest,
    request: Request,
    accounts: LedgerAccountRepository = Depends(get_account_repository),
):
    """
    Run a read-only operation. Only "listTransactions" is supported.

    listTransactions(authToken, accountId): accountId is a base64-encoded
    JSON account key. Returns the account's transactions, oldest first, each
    with the account's current balance.
    """
    request_id = get_request_id(request)

    try:
        if body.function != "listTransactions":
            raise UnsupportedOperationError(body.function)

        check_argument_count(body.args, LIST_TRANSACTIONS_PARAMETERS)
        decode_base64_text(body.args[0], "authToken")
        account_key = parse_account_key(decode_base64_text(body.args[1], "accountId"))

        account = accounts.get(account_key)

    except UnsupportedOperationError as e:
        logging.warning(f"Unsupported operation: {e.function}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except (IncorrectArgumentsError, MalformedInputError) as e:
        logging.warning(f"Malformed query: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    except LedgerUnavailableError as e:
        logging.error(f"Ledger unavailable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Ledger store unavailable")

    except LedgerCorruptionError as e:
        logging.critical(f"Ledger data corrupted: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Ledger data corrupted")

    return TransactionsViewSchema.from_domain(project_transactions(account))
