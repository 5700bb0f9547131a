from .db import AccountRow, TransactionRow
from .domain import Account, Transaction
from .schemas import (
    AccountCreate,
    AccountResponse,
    BalanceResponse,
    MoneyMovementRequest,
    StatementResponse,
    TransactionResponse,
    TransferRequest,
    TransferResponse,
)

__all__ = [
    "Account",
    "Transaction",
    "AccountCreate",
    "AccountResponse",
    "BalanceResponse",
    "MoneyMovementRequest",
    "StatementResponse",
    "TransactionResponse",
    "TransferRequest",
    "TransferResponse",
    "AccountRow",
    "TransactionRow",
]
