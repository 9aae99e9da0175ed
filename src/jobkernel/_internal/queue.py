from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from jobkernel._internal.exceptions import QueueEmptyError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from jobkernel._internal.table import JobHandle


class JobQueue:
    """FIFO of job handles. Insertion order is the scheduling order."""

    __slots__: tuple[str, ...] = ("_items",)

    def __init__(self, handles: Iterable[JobHandle] = ()) -> None:
        self._items: deque[JobHandle] = deque(handles)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JobHandle]:
        return iter(self._items)

    def __contains__(self, handle: object) -> bool:
        return handle in self._items

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({list(self._items)!r})"

    def push(self, handle: JobHandle) -> None:
        self._items.append(handle)

    def pop(self) -> JobHandle:
        try:
            return self._items.popleft()
        except IndexError:
            raise QueueEmptyError from None

    def peek(self) -> JobHandle:
        try:
            return self._items[0]
        except IndexError:
            raise QueueEmptyError from None

    def has_next(self) -> bool:
        return bool(self._items)

    def remove(self, handle: JobHandle) -> bool:
        try:
            self._items.remove(handle)
        except ValueError:
            return False
        return True
