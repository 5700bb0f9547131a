from functools import lru_cache

from fastapi import Depends
from sqlmodel import Session

from ..services import (
    AccountLocks,
    AccountRepository,
    AccountService,
    FileAccountRepository,
    FileTransactionRepository,
    SqlAccountRepository,
    SqlTransactionRepository,
    TransactionRepository,
    TransactionService,
)
from .config import get_settings
from .db import get_session


@lru_cache()
def get_account_locks() -> AccountLocks:
    return AccountLocks()


def get_account_repository(session: Session = Depends(get_session)) -> AccountRepository:
    settings = get_settings()
    if settings.storage_backend == "file":
        return FileAccountRepository(settings.data_dir / "accounts.jsonl")
    return SqlAccountRepository(session)


def get_transaction_repository(
    session: Session = Depends(get_session),
) -> TransactionRepository:
    settings = get_settings()
    if settings.storage_backend == "file":
        return FileTransactionRepository(settings.data_dir / "transactions.jsonl")
    return SqlTransactionRepository(session)


def get_account_service(
    repository: AccountRepository = Depends(get_account_repository),
    locks: AccountLocks = Depends(get_account_locks),
) -> AccountService:
    return AccountService(repository, locks, minimum_age=get_settings().minimum_age)


def get_transaction_service(
    repository: TransactionRepository = Depends(get_transaction_repository),
    locks: AccountLocks = Depends(get_account_locks),
) -> TransactionService:
    return TransactionService(repository, locks)
