from datetime import date

import pytest
from sqlmodel import Session, SQLModel

from ..core.db import create_engine_for_url
from ..services import (
    AccountLocks,
    AccountService,
    FileAccountRepository,
    FileTransactionRepository,
    SqlAccountRepository,
    SqlTransactionRepository,
    TransactionService,
)

TODAY = date(2024, 6, 15)


@pytest.fixture
def sql_engine(tmp_path):
    engine = create_engine_for_url(f"sqlite:///{tmp_path / 'bank.db'}")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_session(sql_engine):
    with Session(sql_engine) as session:
        yield session


@pytest.fixture(params=["sql", "file"])
def repositories(request, tmp_path):
    if request.param == "file":
        yield (
            FileAccountRepository(tmp_path / "accounts.jsonl"),
            FileTransactionRepository(tmp_path / "transactions.jsonl"),
        )
        return
    session = request.getfixturevalue("sql_session")
    yield SqlAccountRepository(session), SqlTransactionRepository(session)


@pytest.fixture
def locks() -> AccountLocks:
    return AccountLocks()


@pytest.fixture
def account_service(repositories, locks) -> AccountService:
    return AccountService(repositories[0], locks, today=lambda: TODAY)


@pytest.fixture
def transaction_service(repositories, locks) -> TransactionService:
    return TransactionService(repositories[1], locks)
