from jobkernel import JobHandle
from jobkernel._internal.waiting import WaitingList

KEY = JobHandle(0, 0)
OTHER = JobHandle(9, 0)


def test_drain_is_fifo_and_removes_entry() -> None:
    waiting = WaitingList()
    waiters = [JobHandle(i, 0) for i in range(1, 4)]
    for waiter in waiters:
        waiting.add(KEY, waiter)

    assert KEY in waiting
    assert waiting.drain(KEY) == waiters
    assert KEY not in waiting
    assert len(waiting) == 0


def test_drain_unknown_key() -> None:
    waiting = WaitingList()
    assert waiting.drain(KEY) == []


def test_discard_waiter() -> None:
    waiting = WaitingList()
    first, second = JobHandle(1, 0), JobHandle(2, 0)
    waiting.add(KEY, first)
    waiting.add(KEY, second)
    waiting.add(OTHER, JobHandle(3, 0))

    assert waiting.discard(first) is True
    assert waiting.discard(first) is False
    assert waiting.drain(KEY) == [second]

    assert waiting.discard(JobHandle(3, 0)) is True
    assert OTHER not in waiting
