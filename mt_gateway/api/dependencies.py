"""Dependency injection for FastAPI endpoints"""

from typing import Iterator, Sequence
from fastapi import Depends, Request
from mt_gateway.config import settings
from mt_gateway.domain.exceptions import IncorrectArgumentsError
from mt_gateway.infrastructure.database.session import get_db
from mt_gateway.infrastructure.ledger.gateway import HttpLedgerGateway, LedgerGateway, SqlLedgerGateway
from mt_gateway.infrastructure.ledger.repositories import LedgerAccountRepository, LedgerUserRepository


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_ledger_gateway() -> Iterator[LedgerGateway]:
    """
    Provide the configured ledger store gateway, bound to the configured store id.

    A database session is opened only for the sql backend and closed when the
    request finishes.
    """
    if settings.ledger_backend == "http":
        yield HttpLedgerGateway(store_id=settings.ledger_store_id)
        return

    sessions = get_db()
    db = next(sessions)
    try:
        yield SqlLedgerGateway(db, store_id=settings.ledger_store_id)
    finally:
        sessions.close()


def get_account_repository(gateway: LedgerGateway = Depends(get_ledger_gateway)) -> LedgerAccountRepository:
    return LedgerAccountRepository(gateway)


def get_user_repository(gateway: LedgerGateway = Depends(get_ledger_gateway)) -> LedgerUserRepository:
    return LedgerUserRepository(gateway)


def check_argument_count(args: Sequence[str], parameters: Sequence[str]) -> None:
    """Raise IncorrectArgumentsError naming the expected parameters"""
    if len(args) != len(parameters):
        raise IncorrectArgumentsError(
            f"Incorrect number of arguments. {len(parameters)} parameters are expected: {', '.join(parameters)}"
        )
