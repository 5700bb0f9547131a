from __future__ import annotations

from decimal import Decimal


class BankingError(Exception):
    """Base class for expected business outcomes reported to the caller."""


class DuplicateIdentityError(BankingError):
    """Raised when an identity number is already registered."""


class UnderageApplicantError(BankingError):
    """Raised when an applicant is younger than the minimum age."""


class AccountNotFoundError(BankingError):
    """Raised when an account number is missing from the store."""


class InvalidAmountError(BankingError):
    """Raised when an amount is zero, negative or not a finite number."""


class SameAccountTransferError(BankingError):
    """Raised when a transfer names the same account on both sides."""


class InsufficientFundsError(BankingError):
    """Raised when a withdrawal/transfer exceeds the available balance."""

    def __init__(self, shortfall: Decimal) -> None:
        self.shortfall = shortfall
        super().__init__(
            f"Insufficient funds: the requested amount exceeds the balance by {shortfall}"
        )


class StorageError(Exception):
    """Raised when a store cannot be read or written."""


class AccountNumberGenerationError(Exception):
    """Raised when no unused account number could be drawn."""


class AccountNumberConflictError(StorageError):
    """Raised when a store already holds the account number being saved."""
