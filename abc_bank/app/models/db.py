from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import BigInteger
from sqlmodel import Field, SQLModel


class AccountRow(SQLModel, table=True):
    __tablename__ = "account"

    account_number: str = Field(primary_key=True, max_length=10)
    account_holder_name: str
    id_number: str = Field(index=True, unique=True)
    date_of_birth: date
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class TransactionRow(SQLModel, table=True):
    __tablename__ = "ledger_transaction"

    seq: Optional[int] = Field(default=None, primary_key=True)
    id: UUID = Field(default_factory=uuid4, unique=True, index=True)
    account_number: str = Field(index=True)
    amount_minor: int = Field(sa_type=BigInteger, description="Signed amount in cents")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)
    transfer_id: Optional[UUID] = Field(default=None, index=True)
