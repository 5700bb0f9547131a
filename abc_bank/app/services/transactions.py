from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from uuid import uuid4

from ..core.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    SameAccountTransferError,
)
from ..models import Transaction
from .locks import AccountLocks
from .repository import TransactionRepository


logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999999999.99")


def to_amount(value: Amount) -> Decimal:
    """Convert a positive whole-cent amount to ``Decimal``; floats go through ``str``."""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidAmountError(f"Amount {value!r} is not a number") from exc
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError(f"Amount must be a positive number, got {value}")
    if amount > MAX_AMOUNT:
        raise InvalidAmountError(f"Amount {value} exceeds {MAX_AMOUNT}")
    if amount.quantize(CENT) != amount:
        raise InvalidAmountError(f"Amount {value} has more than two decimal places")
    return amount


class TransactionService:
    def __init__(
        self,
        repository: TransactionRepository,
        locks: Optional[AccountLocks] = None,
    ) -> None:
        self.repository = repository
        self.locks = locks or AccountLocks()

    def _ensure_funds(self, account_number: str, amount: Decimal) -> None:
        balance = self.get_balance(account_number)
        if balance < amount:
            raise InsufficientFundsError(shortfall=amount - balance)

    def get_transactions(self, account_number: str) -> list[Transaction]:
        return self.repository.get_transactions(account_number)

    def get_balance(self, account_number: str) -> Decimal:
        return sum(
            (t.amount for t in self.get_transactions(account_number)),
            Decimal("0"),
        )

    def deposit(self, account_number: str, amount: Amount) -> Transaction:
        value = to_amount(amount)
        transaction = Transaction(account_number=account_number, amount=value)
        self.repository.save(transaction)
        logger.info(
            "account.deposit",
            extra={"account_number": account_number, "amount": str(value)},
        )
        return transaction

    def withdraw(self, account_number: str, amount: Amount) -> Transaction:
        value = to_amount(amount)
        with self.locks.hold(account_number):
            self._ensure_funds(account_number, value)
            transaction = Transaction(account_number=account_number, amount=-value)
            self.repository.save(transaction)
        logger.info(
            "account.withdraw",
            extra={"account_number": account_number, "amount": str(value)},
        )
        return transaction

    def transfer(
        self,
        from_account: str,
        to_account: str,
        amount: Amount,
    ) -> tuple[Transaction, Transaction]:
        value = to_amount(amount)
        if from_account == to_account:
            raise SameAccountTransferError("Cannot transfer to the same account")

        transfer_id = uuid4()
        with self.locks.hold(from_account, to_account):
            self._ensure_funds(from_account, value)
            debit = Transaction(
                account_number=from_account, amount=-value, transfer_id=transfer_id
            )
            credit = Transaction(
                account_number=to_account, amount=value, transfer_id=transfer_id
            )
            self.repository.save_all([debit, credit])
        logger.info(
            "account.transfer",
            extra={
                "transfer_id": str(transfer_id),
                "source_account_number": from_account,
                "dest_account_number": to_account,
                "amount": str(value),
            },
        )
        return debit, credit
