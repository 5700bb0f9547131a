from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    account_holder_name: str = Field(..., min_length=1, description="Name of the account holder")
    id_number: str = Field(..., min_length=1, description="Externally issued identity number")
    date_of_birth: date


class AccountResponse(BaseModel):
    account_number: str
    account_holder_name: str
    id_number: str
    date_of_birth: date
    created_at: datetime


class BalanceResponse(BaseModel):
    account_number: str
    balance: Decimal


class TransactionResponse(BaseModel):
    id: UUID
    account_number: str
    amount: Decimal
    created_at: datetime
    transfer_id: Optional[UUID] = Field(default=None, description="Shared by both legs of a transfer")


class StatementResponse(BaseModel):
    account_number: str
    balance: Decimal
    items: list[TransactionResponse]


class MoneyMovementRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)


class TransferRequest(BaseModel):
    source_account_number: str
    dest_account_number: str
    amount: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)


class TransferResponse(BaseModel):
    transfer_id: UUID
    source: BalanceResponse
    dest: BalanceResponse
