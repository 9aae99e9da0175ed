from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jobkernel._internal.common.constants import JobStatus
from jobkernel._internal.execution import Execution, Failure

if TYPE_CHECKING:
    from jobkernel._internal.common.types import Clock
    from jobkernel._internal.shared_state import SharedState
    from jobkernel._internal.table import JobHandle, JobRecord

logger = logging.getLogger("jobkernel.dispatch")


class Dispatcher:
    """Resumes jobs, completes them and wakes the jobs waiting on them."""

    __slots__: tuple[str, ...] = ("_clock", "_shared")

    def __init__(self, shared: SharedState, *, clock: Clock) -> None:
        self._shared: SharedState = shared
        self._clock: Clock = clock

    def start_job(self, handle: JobHandle) -> None:
        shared = self._shared
        record = shared.table.get(handle)
        if record is None or record.status in (
            JobStatus.DONE,
            JobStatus.WAITING,
        ):
            shared.unqueue(handle)
            return

        record.start_time = self._clock()
        record.pass_out = ()
        record.status = JobStatus.RUNNING
        values, record.pass_in = record.pass_in, ()

        shared.running = handle
        try:
            outcome = record.execution.resume(values)
        finally:
            shared.running = None
        record.pass_out = outcome.values

        if record.execution.finished:
            if isinstance(outcome, Failure):
                logger.error(
                    "Job %r failed with unexpected error",
                    record.name,
                    exc_info=outcome.error,
                )
            self.end_job(record)
        elif record.status is JobStatus.RUNNING:
            record.status = JobStatus.READY

    def end_job(self, record: JobRecord) -> None:
        shared = self._shared
        record.status = JobStatus.DONE
        shared.unqueue(record.handle)
        self.signal(record.handle)

        if record.callback is None:
            return

        callback = Execution(record.callback)
        outcome = callback.resume(record.pass_out)
        if isinstance(outcome, Failure):
            logger.error(
                "Callback of job %r failed",
                record.name,
                exc_info=outcome.error,
            )
        elif not callback.finished:
            logger.warning(
                "Callback of job %r suspended and was closed", record.name
            )
            try:
                callback.close()
            except Exception:
                logger.exception(
                    "Closing callback of job %r failed", record.name
                )
        _ = shared.table.delete(record.handle)

    def signal(self, key: JobHandle) -> None:
        record = self._shared.table.get(key)
        values = record.pass_out if record is not None else ()
        for waiter in self._shared.waiting.drain(key):
            _ = self.resume_job(waiter, *values)

    def resume_job(self, handle: JobHandle, *values: object) -> bool:
        record = self._shared.table.get(handle)
        if record is None or not record.is_waiting():
            logger.debug("Ignoring resume of non-waiting job %r", handle)
            return False
        _ = self._shared.waiting.discard(handle)
        record.status = JobStatus.READY
        record.pass_in = values
        self._shared.queue.push(handle)
        return True
