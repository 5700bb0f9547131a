from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from datetime import date
from typing import Optional

from ..core.errors import (
    AccountNotFoundError,
    AccountNumberConflictError,
    AccountNumberGenerationError,
    DuplicateIdentityError,
    UnderageApplicantError,
)
from ..models import Account
from .locks import AccountLocks
from .repository import AccountRepository


logger = logging.getLogger(__name__)

ACCOUNT_NUMBER_LENGTH = 10
MAX_NUMBER_ATTEMPTS = 20


def age_on(date_of_birth: date, today: date) -> int:
    """Whole years elapsed between ``date_of_birth`` and ``today``."""
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def random_account_number() -> str:
    low = 10 ** (ACCOUNT_NUMBER_LENGTH - 1)
    return str(low + secrets.randbelow(9 * low))


class AccountService:
    def __init__(
        self,
        repository: AccountRepository,
        locks: Optional[AccountLocks] = None,
        *,
        minimum_age: int = 18,
        today: Callable[[], date] = date.today,
        number_factory: Callable[[], str] = random_account_number,
    ) -> None:
        self.repository = repository
        self.locks = locks or AccountLocks()
        self.minimum_age = minimum_age
        self.today = today
        self.number_factory = number_factory

    def generate_account_number(self) -> str:
        for _ in range(MAX_NUMBER_ATTEMPTS):
            candidate = self.number_factory()
            if self.repository.get_by_account_number(candidate) is None:
                return candidate
        raise AccountNumberGenerationError(
            f"No unused account number after {MAX_NUMBER_ATTEMPTS} attempts"
        )

    def _save_with_fresh_number(
        self, name: str, id_number: str, date_of_birth: date
    ) -> Account:
        # Another process may claim the same number between the check and the save.
        for _ in range(MAX_NUMBER_ATTEMPTS):
            account = Account(
                account_holder_name=name,
                id_number=id_number,
                date_of_birth=date_of_birth,
                account_number=self.generate_account_number(),
            )
            try:
                self.repository.save(account)
            except AccountNumberConflictError:
                logger.warning(
                    "account.number_conflict",
                    extra={"account_number": account.account_number},
                )
                continue
            return account
        raise AccountNumberGenerationError(
            f"Account numbers kept colliding after {MAX_NUMBER_ATTEMPTS} attempts"
        )

    def create_account(self, name: str, id_number: str, date_of_birth: date) -> Account:
        with self.locks.registration:
            if self.repository.get_by_id_number(id_number) is not None:
                logger.info("account.rejected", extra={"reason": "duplicate_identity"})
                raise DuplicateIdentityError(
                    f"Identity number {id_number} is already registered"
                )

            age = age_on(date_of_birth, self.today())
            if age < self.minimum_age:
                logger.info(
                    "account.rejected",
                    extra={"reason": "underage", "age": age},
                )
                raise UnderageApplicantError(
                    f"Applicants must be at least {self.minimum_age} years old"
                )

            account = self._save_with_fresh_number(name, id_number, date_of_birth)

        logger.info(
            "account.created",
            extra={"account_number": account.account_number},
        )
        return account

    def get_account(self, account_number: str) -> Optional[Account]:
        return self.repository.get_by_account_number(account_number)

    def require_account(self, account_number: str) -> Account:
        account = self.get_account(account_number)
        if account is None:
            raise AccountNotFoundError(f"Account {account_number} not found")
        return account
