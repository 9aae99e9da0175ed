from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jobkernel._internal.exceptions import raise_not_in_job_error
from jobkernel._internal.queue import JobQueue
from jobkernel._internal.table import JobTable
from jobkernel._internal.waiting import WaitingList

if TYPE_CHECKING:
    from jobkernel._internal.common.types import Values
    from jobkernel._internal.table import JobHandle, JobRecord


@dataclass(slots=True, kw_only=True)
class SharedState:
    table: JobTable = field(default_factory=JobTable)
    queue: JobQueue = field(default_factory=JobQueue)
    waiting: WaitingList = field(default_factory=WaitingList)
    running: JobHandle | None = None

    def running_record(self, operation: str) -> JobRecord:
        if self.running is None:
            raise_not_in_job_error(operation)
        return self.table.lookup(self.running)

    def unqueue(self, handle: JobHandle) -> None:
        if self.queue.has_next() and self.queue.peek() == handle:
            _ = self.queue.pop()
        else:
            _ = self.queue.remove(handle)

    def consume(self, record: JobRecord) -> Values:
        """Return the buffered values, deleting the entry of a finished job."""
        values = record.pass_out
        if record.is_done():
            _ = self.table.delete(record.handle)
        return values
