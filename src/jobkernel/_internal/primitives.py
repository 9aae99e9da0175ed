from __future__ import annotations

from typing import TYPE_CHECKING, final

from jobkernel._internal.common.constants import JobStatus
from jobkernel._internal.execution import SUSPEND

if TYPE_CHECKING:
    from collections.abc import Generator

    from jobkernel._internal.common.types import Clock, Values
    from jobkernel._internal.shared_state import SharedState
    from jobkernel._internal.table import JobHandle


@final
class WaitFor:
    """Suspend the running job until it is resumed.

    Awaiting it with no target parks the job until someone calls
    ``resume_job`` on it. With a target, the job is resumed by the target's
    completion and receives the target's result values. A target that has
    already completed delivers its values without suspending.
    Usable as ``await kernel.wait(...)`` or ``yield from kernel.wait(...)``.
    """

    __slots__: tuple[str, ...] = ("_shared", "_waitee")

    def __init__(
        self,
        shared: SharedState,
        waitee: JobHandle | None = None,
    ) -> None:
        self._shared: SharedState = shared
        self._waitee: JobHandle | None = waitee

    def __await__(self) -> Generator[object, Values, Values]:
        shared = self._shared
        record = shared.running_record("wait")

        if self._waitee is None:
            shared.unqueue(record.handle)
            record.status = JobStatus.WAITING
            values: Values = yield SUSPEND
            return values

        target = shared.table.lookup(self._waitee)
        if target.is_done():
            return shared.consume(target)

        shared.waiting.add(target.handle, record.handle)
        shared.unqueue(record.handle)
        record.status = JobStatus.WAITING
        values = yield SUSPEND

        if (target := shared.table.get(self._waitee)) is not None:
            _ = shared.consume(target)
        return values

    __iter__ = __await__


@final
class Timeout:
    """Requeue the running job at the tail once its burst time is used up.

    Returns immediately while the job is still within its burst.
    """

    __slots__: tuple[str, ...] = ("_burst_time", "_clock", "_shared")

    def __init__(
        self,
        shared: SharedState,
        *,
        clock: Clock,
        burst_time: float,
    ) -> None:
        self._shared: SharedState = shared
        self._clock: Clock = clock
        self._burst_time: float = burst_time

    def __await__(self) -> Generator[object, Values, None]:
        shared = self._shared
        record = shared.running_record("timeout")
        if self._clock() - record.start_time <= self._burst_time:
            return

        shared.unqueue(record.handle)
        shared.queue.push(record.handle)
        record.status = JobStatus.READY
        _ = yield SUSPEND

    __iter__ = __await__
