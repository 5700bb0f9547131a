from datetime import date

import pytest

from ..core.errors import (
    AccountNotFoundError,
    AccountNumberGenerationError,
    DuplicateIdentityError,
    UnderageApplicantError,
)
from ..services import AccountService
from ..services.accounts import age_on, random_account_number
from .conftest import TODAY


def test_create_account_returns_persisted_account(account_service: AccountService) -> None:
    account = account_service.create_account("Alice", "80-1234567A80", date(1990, 3, 1))

    assert account.account_holder_name == "Alice"
    assert len(account.account_number) == 10
    assert account.account_number.isdigit()
    assert account_service.get_account(account.account_number) == account


def test_duplicate_identity_is_rejected(account_service: AccountService) -> None:
    first = account_service.create_account("Bob", "ID-1", date(1985, 1, 1))

    with pytest.raises(DuplicateIdentityError):
        account_service.create_account("Robert", "ID-1", date(1985, 1, 1))

    assert account_service.get_account(first.account_number) == first
    assert len(account_service.repository.get_all()) == 1


def test_seventeen_year_old_is_rejected(account_service: AccountService) -> None:
    with pytest.raises(UnderageApplicantError):
        account_service.create_account("Carol", "ID-2", date(2006, 12, 31))

    assert account_service.repository.get_all() == []


def test_eighteenth_birthday_is_old_enough(account_service: AccountService) -> None:
    account = account_service.create_account("Dave", "ID-3", date(2006, 6, 15))

    assert account_service.get_account(account.account_number) is not None


def test_day_before_eighteenth_birthday_is_too_young(account_service: AccountService) -> None:
    with pytest.raises(UnderageApplicantError):
        account_service.create_account("Erin", "ID-4", date(2006, 6, 16))


def test_age_counts_whole_years() -> None:
    assert age_on(date(2000, 2, 29), date(2018, 2, 28)) == 17
    assert age_on(date(2000, 2, 29), date(2018, 3, 1)) == 18
    assert age_on(date(2000, 1, 1), date(2000, 12, 31)) == 0


def test_get_account_missing_returns_none(account_service: AccountService) -> None:
    assert account_service.get_account("0000000000") is None
    with pytest.raises(AccountNotFoundError):
        account_service.require_account("0000000000")


def test_random_account_number_is_fixed_width() -> None:
    for _ in range(200):
        number = random_account_number()
        assert len(number) == 10
        assert number.isdigit()
        assert number[0] != "0"


def test_account_number_collision_is_retried(repositories, locks) -> None:
    candidates = iter(["1111111111", "1111111111", "2222222222"])
    service = AccountService(
        repositories[0], locks, today=lambda: TODAY, number_factory=lambda: next(candidates)
    )

    first = service.create_account("Frank", "ID-5", date(1970, 1, 1))
    second = service.create_account("Grace", "ID-6", date(1970, 1, 1))

    assert first.account_number == "1111111111"
    assert second.account_number == "2222222222"


def test_account_number_generation_gives_up(repositories, locks) -> None:
    service = AccountService(
        repositories[0], locks, today=lambda: TODAY, number_factory=lambda: "3333333333"
    )
    service.create_account("Heidi", "ID-7", date(1970, 1, 1))

    with pytest.raises(AccountNumberGenerationError):
        service.create_account("Ivan", "ID-8", date(1970, 1, 1))


def test_minimum_age_is_configurable(repositories, locks) -> None:
    service = AccountService(repositories[0], locks, minimum_age=21, today=lambda: TODAY)

    with pytest.raises(UnderageApplicantError):
        service.create_account("Judy", "ID-9", date(2004, 1, 1))
