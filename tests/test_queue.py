import pytest

from jobkernel import JobHandle
from jobkernel._internal.queue import JobQueue
from jobkernel.exceptions import QueueEmptyError

A = JobHandle(0, 0)
B = JobHandle(1, 0)
C = JobHandle(2, 0)


def test_fifo_order() -> None:
    queue = JobQueue()
    queue.push(A)
    queue.push(B)
    queue.push(C)

    assert len(queue) == 3
    assert queue.peek() == A
    assert queue.pop() == A
    assert queue.pop() == B
    assert list(queue) == [C]


def test_peek_does_not_remove() -> None:
    queue = JobQueue([A, B])
    assert queue.peek() == A
    assert queue.peek() == A
    assert len(queue) == 2


def test_empty_queue() -> None:
    queue = JobQueue()
    assert queue.has_next() is False
    with pytest.raises(QueueEmptyError, match="The job queue is empty."):
        _ = queue.pop()
    with pytest.raises(QueueEmptyError):
        _ = queue.peek()


def test_storage_does_not_grow_with_turnover() -> None:
    queue = JobQueue()
    for _ in range(10_000):
        queue.push(A)
        _ = queue.pop()
    assert len(queue) == 0
    assert queue._items.maxlen is None
    assert not queue.has_next()


def test_remove() -> None:
    queue = JobQueue([A, B, C])
    assert queue.remove(B) is True
    assert queue.remove(B) is False
    assert B not in queue
    assert repr(queue) == "JobQueue([JobHandle(0:0), JobHandle(2:0)])"
