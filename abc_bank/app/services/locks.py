from __future__ import annotations

import threading
import weakref
from collections.abc import Iterator
from contextlib import contextmanager


class AccountLocks:
    """Process-wide locks serializing balance-dependent writes per account.

    Per-account locks are held weakly, so an entry disappears once no caller
    is holding or waiting on it.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self.registration = threading.Lock()

    def _lock_for(self, account_number: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(account_number)
            if lock is None:
                lock = threading.Lock()
                self._locks[account_number] = lock
            return lock

    @contextmanager
    def hold(self, *account_numbers: str) -> Iterator[None]:
        # Sorted acquisition keeps two opposite transfers from deadlocking.
        locks = [self._lock_for(number) for number in sorted(set(account_numbers))]
        for lock in locks:
            lock.acquire()
        try:
            yield
        finally:
            for lock in reversed(locks):
                lock.release()
