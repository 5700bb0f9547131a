"""JSON Lines stores for running without a database.

Each line is one self-describing JSON object carrying a format ``version``.
Appends are a single ``write`` followed by ``fsync``; a last line without its
newline is a torn write and is dropped on read and truncated before the next
append.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ValidationError

from ..core.errors import StorageError
from ..models import Account, Transaction
from .repository import AccountRepository, TransactionRepository


logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_file_locks: dict[Path, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _file_locks_guard:
        return _file_locks.setdefault(path.resolve(), threading.Lock())


class AccountLine(BaseModel):
    version: Literal[1] = FORMAT_VERSION
    account: Account


class PostingLine(BaseModel):
    version: Literal[1] = FORMAT_VERSION
    legs: list[Transaction]


class JsonLinesFile:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def read_lines(self) -> list[str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageError(f"Could not read {self.path}") from exc

        lines = raw.split("\n")
        tail = lines.pop()
        if tail:
            logger.warning(
                "storage.torn_tail_ignored",
                extra={"path": str(self.path), "bytes": len(tail.encode("utf-8"))},
            )
        return [line for line in lines if line]

    def append(self, line: str) -> None:
        payload = (line + "\n").encode("utf-8")
        with self._lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, "ab+") as handle:
                    self._truncate_torn_tail(handle)
                    handle.write(payload)
                    handle.flush()
                    os.fsync(handle.fileno())
            except OSError as exc:
                raise StorageError(f"Could not write {self.path}") from exc

    def _truncate_torn_tail(self, handle) -> None:
        size = handle.seek(0, os.SEEK_END)
        if size == 0:
            return
        handle.seek(0)
        content = handle.read()
        if content.endswith(b"\n"):
            return
        keep = content.rfind(b"\n") + 1
        logger.warning(
            "storage.torn_tail_truncated",
            extra={"path": str(self.path), "bytes": size - keep},
        )
        handle.truncate(keep)
        handle.seek(keep)


class FileAccountRepository(AccountRepository):
    """Account store over ``accounts.jsonl``."""

    def __init__(self, path: Path) -> None:
        self.file = JsonLinesFile(path)

    def save(self, account: Account) -> None:
        self.file.append(AccountLine(account=account).model_dump_json())

    def get_all(self) -> list[Account]:
        accounts = []
        for number, line in enumerate(self.file.read_lines(), start=1):
            try:
                accounts.append(AccountLine.model_validate_json(line).account)
            except ValidationError as exc:
                raise StorageError(
                    f"Unreadable account record on line {number} of {self.file.path}"
                ) from exc
        return accounts

    def get_by_account_number(self, account_number: str) -> Optional[Account]:
        return next(
            (a for a in self.get_all() if a.account_number == account_number), None
        )

    def get_by_id_number(self, id_number: str) -> Optional[Account]:
        return next((a for a in self.get_all() if a.id_number == id_number), None)


class FileTransactionRepository(TransactionRepository):
    """Transaction store over ``transactions.jsonl``; one posting per line."""

    def __init__(self, path: Path) -> None:
        self.file = JsonLinesFile(path)

    def save_all(self, transactions: list[Transaction]) -> None:
        if not transactions:
            return
        self.file.append(PostingLine(legs=transactions).model_dump_json())

    def get_transactions(self, account_number: str) -> list[Transaction]:
        matches = []
        for number, line in enumerate(self.file.read_lines(), start=1):
            try:
                posting = PostingLine.model_validate_json(line)
            except ValidationError as exc:
                raise StorageError(
                    f"Unreadable posting on line {number} of {self.file.path}"
                ) from exc
            matches.extend(leg for leg in posting.legs if leg.account_number == account_number)
        return matches
