from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, final

from typing_extensions import override

from jobkernel._internal.common.constants import JobStatus
from jobkernel._internal.exceptions import JobNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from jobkernel._internal.common.types import Callback, Values
    from jobkernel._internal.execution import Execution


class JobHandle(NamedTuple):
    """Opaque job identifier: an arena slot plus the slot's generation.

    A freed slot gets a new generation before it is reissued, so a handle
    kept after its job was deleted never resolves to a newer job.
    """

    index: int
    generation: int

    @override
    def __repr__(self) -> str:
        return f"JobHandle({self.index}:{self.generation})"


class JobInfo(NamedTuple):
    handle: JobHandle
    name: str
    status: JobStatus
    has_callback: bool


@final
class JobRecord:
    __slots__: tuple[str, ...] = (
        "callback",
        "execution",
        "handle",
        "name",
        "pass_in",
        "pass_out",
        "start_time",
        "status",
    )

    def __init__(
        self,
        *,
        handle: JobHandle,
        name: str,
        execution: Execution,
        pass_in: Values = (),
        callback: Callback | None = None,
    ) -> None:
        self.handle = handle
        self.name = name
        self.execution = execution
        self.pass_in: Values = pass_in
        self.pass_out: Values = ()
        self.callback = callback
        self.status: JobStatus = JobStatus.READY
        self.start_time: float = 0.0

    @override
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}("
            f"handle={self.handle!r}, "
            f"name={self.name!r}, "
            f"status={self.status.value})"
        )

    def is_done(self) -> bool:
        return self.status is JobStatus.DONE

    def is_waiting(self) -> bool:
        return self.status is JobStatus.WAITING

    def info(self) -> JobInfo:
        return JobInfo(
            handle=self.handle,
            name=self.name,
            status=self.status,
            has_callback=self.callback is not None,
        )


class JobTable:
    """Arena of job records addressed by generation-checked handles."""

    __slots__: tuple[str, ...] = ("_free", "_generations", "_records")

    def __init__(self) -> None:
        self._records: list[JobRecord | None] = []
        self._generations: list[int] = []
        self._free: list[int] = []

    def __len__(self) -> int:
        return len(self._records) - len(self._free)

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, JobHandle) and self.get(handle) is not None

    def __iter__(self) -> Iterator[JobRecord]:
        return (record for record in self._records if record is not None)

    def register(
        self,
        *,
        name: str,
        execution: Execution,
        pass_in: Values = (),
        callback: Callback | None = None,
    ) -> JobRecord:
        if self._free:
            index = self._free.pop()
        else:
            index = len(self._records)
            self._records.append(None)
            self._generations.append(0)

        handle = JobHandle(index, self._generations[index])
        record = JobRecord(
            handle=handle,
            name=name,
            execution=execution,
            pass_in=pass_in,
            callback=callback,
        )
        self._records[index] = record
        return record

    def get(self, handle: JobHandle) -> JobRecord | None:
        index, generation = handle
        if not 0 <= index < len(self._records):
            return None
        if self._generations[index] != generation:
            return None
        return self._records[index]

    def lookup(self, handle: JobHandle) -> JobRecord:
        record = self.get(handle)
        if record is None:
            raise JobNotFoundError(handle)
        return record

    def delete(self, handle: JobHandle) -> bool:
        if self.get(handle) is None:
            return False
        index = handle.index
        self._records[index] = None
        self._generations[index] += 1
        self._free.append(index)
        return True
