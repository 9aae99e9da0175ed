"""Cooperative job scheduling for the jobkernel package.

This module exposes the scheduler entrypoint together with the handle,
status and configuration types that client code works with.
"""

from importlib.metadata import version as get_version

from jobkernel._internal.common.constants import JobStatus
from jobkernel._internal.configuration import KernelConfiguration
from jobkernel._internal.execution import Failure, Success
from jobkernel._internal.table import JobHandle, JobInfo
from jobkernel.jobkernel import JobKernel

__version__ = get_version("jobkernel")
__all__ = (
    "Failure",
    "JobHandle",
    "JobInfo",
    "JobKernel",
    "JobStatus",
    "KernelConfiguration",
    "Success",
)
