from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from ..core.errors import (
    AccountNumberConflictError,
    DuplicateIdentityError,
    StorageError,
)
from ..models import Account, AccountRow, Transaction, TransactionRow


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without their zone; they are stored as UTC.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _to_row(transaction: Transaction) -> TransactionRow:
    data = transaction.model_dump(exclude={"amount"})
    return TransactionRow(**data, amount_minor=int(transaction.amount.scaleb(2)))


def _from_row(row: TransactionRow) -> Transaction:
    data = row.model_dump(exclude={"seq", "amount_minor"})
    data["created_at"] = _as_utc(row.created_at)
    return Transaction(**data, amount=Decimal(row.amount_minor).scaleb(-2))


class AccountRepository(ABC):
    """Persists registered accounts."""

    @abstractmethod
    def save(self, account: Account) -> None: ...

    @abstractmethod
    def get_all(self) -> list[Account]: ...

    @abstractmethod
    def get_by_account_number(self, account_number: str) -> Optional[Account]: ...

    @abstractmethod
    def get_by_id_number(self, id_number: str) -> Optional[Account]: ...


class TransactionRepository(ABC):
    """Persists transaction legs; reads return them in recording order."""

    @abstractmethod
    def save_all(self, transactions: list[Transaction]) -> None:
        """Store every transaction in one write: all of them or none."""

    def save(self, transaction: Transaction) -> None:
        self.save_all([transaction])

    @abstractmethod
    def get_transactions(self, account_number: str) -> list[Transaction]: ...


class SqlAccountRepository(AccountRepository):
    """Account store backed by a SQLModel session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _to_account(self, row: AccountRow) -> Account:
        data = row.model_dump()
        data["created_at"] = _as_utc(row.created_at)
        return Account(**data)

    def save(self, account: Account) -> None:
        self.session.add(AccountRow(**account.model_dump()))
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if self.get_by_id_number(account.id_number) is not None:
                raise DuplicateIdentityError(
                    f"Identity number {account.id_number} is already registered"
                ) from exc
            raise AccountNumberConflictError(
                f"Account number {account.account_number} is already taken"
            ) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError("Could not save account") from exc

    def get_all(self) -> list[Account]:
        try:
            rows = self.session.exec(select(AccountRow)).all()
        except SQLAlchemyError as exc:
            raise StorageError("Could not read accounts") from exc
        return [self._to_account(row) for row in rows]

    def get_by_account_number(self, account_number: str) -> Optional[Account]:
        try:
            row = self.session.get(AccountRow, account_number)
        except SQLAlchemyError as exc:
            raise StorageError("Could not read accounts") from exc
        return self._to_account(row) if row is not None else None

    def get_by_id_number(self, id_number: str) -> Optional[Account]:
        stmt = select(AccountRow).where(AccountRow.id_number == id_number)
        try:
            row = self.session.exec(stmt).first()
        except SQLAlchemyError as exc:
            raise StorageError("Could not read accounts") from exc
        return self._to_account(row) if row is not None else None


class SqlTransactionRepository(TransactionRepository):
    """Transaction store backed by a SQLModel session; one commit per write."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def save_all(self, transactions: list[Transaction]) -> None:
        self.session.add_all([_to_row(t) for t in transactions])
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError("Could not save transactions") from exc

    def get_transactions(self, account_number: str) -> list[Transaction]:
        stmt = (
            select(TransactionRow)
            .where(TransactionRow.account_number == account_number)
            .order_by(TransactionRow.seq)
        )
        try:
            rows = self.session.exec(stmt).all()
        except SQLAlchemyError as exc:
            raise StorageError("Could not read transactions") from exc
        return [_from_row(row) for row in rows]
