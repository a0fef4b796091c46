from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from uuid import UUID


class _Entry:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class AccountLocks:
    """Process-wide registry of per-account mutexes.

    Locks are always taken in ascending account id order so two requests
    touching the same pair of accounts can never wait on each other in a cycle.
    An entry lives only while some request holds or waits for it.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _checkout(self, key: str) -> _Entry:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _Entry()
            entry.holders += 1
            return entry

    def _checkin(self, key: str) -> None:
        with self._guard:
            entry = self._locks[key]
            entry.holders -= 1
            if entry.holders == 0:
                del self._locks[key]

    @contextmanager
    def _hold_one(self, key: str) -> Iterator[None]:
        entry = self._checkout(key)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(key)

    @staticmethod
    def ordered(*account_ids: UUID) -> list[UUID]:
        unique = {str(account_id): account_id for account_id in account_ids}
        return [unique[key] for key in sorted(unique)]

    @contextmanager
    def hold(self, *account_ids: UUID) -> Iterator[None]:
        with ExitStack() as stack:
            for account_id in self.ordered(*account_ids):
                stack.enter_context(self._hold_one(str(account_id)))
            yield
