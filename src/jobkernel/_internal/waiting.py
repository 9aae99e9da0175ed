from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jobkernel._internal.table import JobHandle


class WaitingList:
    """Jobs blocked on another job's completion, keyed by the awaited job."""

    __slots__: tuple[str, ...] = ("_waiters",)

    def __init__(self) -> None:
        self._waiters: dict[JobHandle, deque[JobHandle]] = {}

    def __len__(self) -> int:
        return len(self._waiters)

    def __contains__(self, key: object) -> bool:
        return key in self._waiters

    def add(self, key: JobHandle, waiter: JobHandle) -> None:
        self._waiters.setdefault(key, deque()).append(waiter)

    def discard(self, waiter: JobHandle) -> bool:
        """Remove `waiter` from whichever entry it is registered on."""
        for key, waiters in self._waiters.items():
            if waiter in waiters:
                waiters.remove(waiter)
                if not waiters:
                    del self._waiters[key]
                return True
        return False

    def drain(self, key: JobHandle) -> list[JobHandle]:
        """Remove the entry for `key` and return its waiters in FIFO order."""
        return list(self._waiters.pop(key, ()))
