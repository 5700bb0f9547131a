from .accounts import AccountService
from .file_repository import FileAccountRepository, FileTransactionRepository
from .locks import AccountLocks
from .repository import (
    AccountRepository,
    SqlAccountRepository,
    SqlTransactionRepository,
    TransactionRepository,
)
from .transactions import TransactionService

__all__ = [
    "AccountLocks",
    "AccountRepository",
    "AccountService",
    "FileAccountRepository",
    "FileTransactionRepository",
    "SqlAccountRepository",
    "SqlTransactionRepository",
    "TransactionRepository",
    "TransactionService",
]
