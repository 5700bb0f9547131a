"""Immutable bookkeeping entities shared by the services and the stores."""

from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    model_config = ConfigDict(frozen=True)

    account_holder_name: str
    id_number: str
    date_of_birth: date
    account_number: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Transaction(BaseModel):
    """A signed movement: positive amounts credit, negative amounts debit."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    account_number: str
    amount: Decimal
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    transfer_id: Optional[UUID] = None
