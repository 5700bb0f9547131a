from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status

from ..core.dependencies import get_account_service, get_transaction_service
from ..models import (
    Account,
    AccountCreate,
    AccountResponse,
    BalanceResponse,
    MoneyMovementRequest,
    StatementResponse,
    TransactionResponse,
    TransferRequest,
    TransferResponse,
)
from ..services import AccountService, TransactionService


router = APIRouter(prefix="/accounts", tags=["accounts"])


def _account_to_response(account: Account) -> AccountResponse:
    return AccountResponse.model_validate(account.model_dump())


def _balance(service: TransactionService, account_number: str) -> BalanceResponse:
    return BalanceResponse(
        account_number=account_number,
        balance=service.get_balance(account_number),
    )

@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    accounts: AccountService = Depends(get_account_service),
) -> AccountResponse:
    account = accounts.create_account(
        payload.account_holder_name, payload.id_number, payload.date_of_birth
    )
    return _account_to_response(account)

@router.get("/{account_number}", response_model=AccountResponse)
def get_account(
    account_number: str,
    accounts: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return _account_to_response(accounts.require_account(account_number))

@router.get("/{account_number}/balance", response_model=BalanceResponse)
def get_balance(
    account_number: str,
    accounts: AccountService = Depends(get_account_service),
    transactions: TransactionService = Depends(get_transaction_service),
) -> BalanceResponse:
    accounts.require_account(account_number)
    return _balance(transactions, account_number)

@router.get("/{account_number}/transactions", response_model=StatementResponse)
def get_statement(
    account_number: str,
    limit: int = Query(50, ge=1, le=500),
    accounts: AccountService = Depends(get_account_service),
    transactions: TransactionService = Depends(get_transaction_service),
) -> StatementResponse:
    accounts.require_account(account_number)
    entries = transactions.get_transactions(account_number)
    newest_first = list(reversed(entries))[:limit]
    return StatementResponse(
        account_number=account_number,
        balance=sum((entry.amount for entry in entries), Decimal("0")),
        items=[
            TransactionResponse.model_validate(entry.model_dump())
            for entry in newest_first
        ],
    )

@router.post("/{account_number}/deposit", response_model=BalanceResponse)
def deposit(
    account_number: str,
    payload: MoneyMovementRequest,
    accounts: AccountService = Depends(get_account_service),
    transactions: TransactionService = Depends(get_transaction_service),
) -> BalanceResponse:
    accounts.require_account(account_number)
    transactions.deposit(account_number, payload.amount)
    return _balance(transactions, account_number)

@router.post("/{account_number}/withdraw", response_model=BalanceResponse)
def withdraw(
    account_number: str,
    payload: MoneyMovementRequest,
    accounts: AccountService = Depends(get_account_service),
    transactions: TransactionService = Depends(get_transaction_service),
) -> BalanceResponse:
    accounts.require_account(account_number)
    transactions.withdraw(account_number, payload.amount)
    return _balance(transactions, account_number)

transfer_router = APIRouter(prefix="/transfers", tags=["transfers"])

@transfer_router.post("", response_model=TransferResponse)
def create_transfer(
    payload: TransferRequest,
    accounts: AccountService = Depends(get_account_service),
    transactions: TransactionService = Depends(get_transaction_service),
) -> TransferResponse:
    accounts.require_account(payload.source_account_number)
    accounts.require_account(payload.dest_account_number)
    debit, _credit = transactions.transfer(
        payload.source_account_number,
        payload.dest_account_number,
        payload.amount,
    )
    return TransferResponse(
        transfer_id=debit.transfer_id,
        source=_balance(transactions, payload.source_account_number),
        dest=_balance(transactions, payload.dest_account_number),
    )

__all__ = ["router", "transfer_router"]
