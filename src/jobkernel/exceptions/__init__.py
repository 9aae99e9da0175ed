"""Custom exceptions for the jobkernel scheduler.

These are the errors raised by the public `JobKernel` surface. Failures
inside job bodies, completion callbacks and the kernel loop itself are
never raised to the caller; they are reported through logging.
"""

from jobkernel._internal.exceptions import (
    BaseJobKernelError,
    JobNotFoundError,
    NotInJobError,
    QueueEmptyError,
    SchedulerClosedError,
)

__all__ = (
    "BaseJobKernelError",
    "JobNotFoundError",
    "NotInJobError",
    "QueueEmptyError",
    "SchedulerClosedError",
)
