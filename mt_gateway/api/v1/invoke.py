"""POST /v1/invoke - state-changing operations (MT transfer)"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from mt_gateway.api.v1.schemas import OperationRequest
from mt_gateway.api.dependencies import (
    check_argument_count,
    get_account_repository,
    get_request_id,
    get_user_repository,
)
from mt_gateway.infrastructure.ledger.repositories import LedgerAccountRepository, LedgerUserRepository
from mt_gateway.domain.transfers import execute_transfer
from mt_gateway.domain.exceptions import (
    IncorrectArgumentsError,
    LedgerCorruptionError,
    LedgerUnavailableError,
    LedgerWriteError,
    MalformedInputError,
    UnsupportedOperationError,
)
from mt_gateway.infrastructure.observability.metrics import record_transfer
from mt_gateway.infrastructure.observability.logging import log_transfer
from mt_gateway.utils.encoding import decode_base64_text

router = APIRouter()

TRANSFER_PARAMETERS = ("authToken", "MT message")


@router.post("/invoke", response_class=PlainTextResponse)
def invoke(
    body: OperationRequest,
    request: Request,
    accounts: LedgerAccountRepository = Depends(get_account_repository),
    users: LedgerUserRepository = Depends(get_user_repository),
):
    """
    Run a state-changing operation. Only "transfer" is supported.

    transfer(authToken, MT message):
    1. Decode the base64 token (ledger key of the caller) and MT message
    2. Validate, render and commit the transfer; the request id is the transaction id
    3. Return "Transaction status: <status>; Comment: <comment>"

    Business failures (missing account, no permission, insufficient funds)
    still return 200 with a Failure status line.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        if body.function != "transfer":
            raise UnsupportedOperationError(body.function)

        check_argument_count(body.args, TRANSFER_PARAMETERS)
        user_key = decode_base64_text(body.args[0], "authToken")
        message = decode_base64_text(body.args[1], "MT message")

        outcome = execute_transfer(message, user_key, accounts, users, transaction_id=request_id)

    except UnsupportedOperationError as e:
        logging.warning(f"Unsupported operation: {e.function}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except (IncorrectArgumentsError, MalformedInputError) as e:
        logging.warning(f"Malformed invocation: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except LedgerWriteError as e:
        # Debit and credit are written separately; report which side landed
        logging.error(f"Ledger write failed: {e}", extra={"request_id": request_id, "applied": e.applied})
        raise HTTPException(status_code=503, detail="Ledger store unavailable")

    except LedgerUnavailableError as e:
        logging.error(f"Ledger unavailable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Ledger store unavailable")

    except LedgerCorruptionError as e:
        logging.critical(f"Ledger data corrupted: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Ledger data corrupted")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_transfer(outcome.status, outcome.comment)
    log_transfer(request_id, outcome.status, outcome.comment, outcome.committed, duration_ms)

    return PlainTextResponse(outcome.status_line)
