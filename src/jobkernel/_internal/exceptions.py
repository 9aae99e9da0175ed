from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

if TYPE_CHECKING:
    from jobkernel._internal.table import JobHandle


class BaseJobKernelError(Exception):
    pass


class QueueEmptyError(BaseJobKernelError, LookupError):
    """Raised when popping or peeking an empty job queue."""

    def __init__(self, msg: str = "The job queue is empty.") -> None:
        super().__init__(msg)


class JobNotFoundError(BaseJobKernelError, LookupError):
    """Raised when a handle does not resolve to a live job."""

    def __init__(self, handle: JobHandle) -> None:
        self.handle: JobHandle = handle
        super().__init__(f"No job is registered for handle {handle!r}.")


class NotInJobError(BaseJobKernelError, RuntimeError):
    """Raised when a job-only primitive is used outside a running job."""

    def __init__(self, operation: str) -> None:
        self.operation: str = operation
        msg = (
            f"Cannot perform operation {operation!r}.\n"
            "  Reason: No job is currently running.\n"
            "  Resolution: Call it from inside a job body created with "
            "'create_job()'."
        )
        super().__init__(msg)


class SchedulerClosedError(BaseJobKernelError, RuntimeError):
    """Raised when creating jobs on a kernel that has been shut down."""

    def __init__(self, operation: str) -> None:
        self.operation: str = operation
        super().__init__(
            f"Cannot perform operation {operation!r}: the kernel is shut down."
        )


def raise_not_in_job_error(operation: str) -> NoReturn:
    raise NotInJobError(operation)
