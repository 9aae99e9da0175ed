"""JobKernel entrypoint."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from typing_extensions import Self

from jobkernel._internal.common.constants import EMPTY
from jobkernel._internal.configuration import KernelConfiguration
from jobkernel._internal.dispatch import Dispatcher
from jobkernel._internal.exceptions import SchedulerClosedError
from jobkernel._internal.execution import Execution
from jobkernel._internal.host import AsyncioHostTimer
from jobkernel._internal.kernel import Kernel
from jobkernel._internal.primitives import Timeout, WaitFor
from jobkernel._internal.shared_state import SharedState

if TYPE_CHECKING:
    from types import TracebackType

    from jobkernel._internal.common.constants import JobStatus
    from jobkernel._internal.common.types import (
        Callback,
        Clock,
        JobFunc,
        Values,
    )
    from jobkernel._internal.host import HostTimer
    from jobkernel._internal.table import JobHandle, JobInfo

logger = logging.getLogger("jobkernel")


class JobKernel:
    """Cooperative, single-threaded job scheduler.

    Jobs run inside a fixed per-cycle time budget. A job gives control back
    by returning, by waiting (``kernel.wait``) or by requeueing itself once
    its burst time is spent (``kernel.timeout``). Nothing interrupts a job
    that does none of these.

    Every instance is independent; job bodies reach the primitives through
    the kernel they were created on.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        config: KernelConfiguration | None = None,
        cycle_time: float = EMPTY,
        up_ratio: float = EMPTY,
        burst_ratio: float = EMPTY,
        host: HostTimer | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        """Initialize a `JobKernel` instance.

        Args:
            config: Timing budget. Defaults to `KernelConfiguration()`.
            cycle_time: Overrides `config.cycle_time`.
            up_ratio: Overrides `config.up_ratio`.
            burst_ratio: Overrides `config.burst_ratio`.
            host: Deferred-callback facility that re-enters the kernel.
                Defaults to the running asyncio event loop.
            clock: Monotonic time source, in seconds.

        """
        overrides: dict[str, Any] = {
            "cycle_time": cycle_time,
            "up_ratio": up_ratio,
            "burst_ratio": burst_ratio,
        }
        config = config or KernelConfiguration()
        self.config: KernelConfiguration = replace(
            config,
            **{k: v for k, v in overrides.items() if v is not EMPTY},
        )
        self._host: HostTimer = host or AsyncioHostTimer()
        self._clock: Clock = clock
        self._shared: SharedState = SharedState()
        self._dispatcher: Dispatcher = Dispatcher(self._shared, clock=clock)
        self._kernel: Kernel | None = None
        self._closed: bool = False

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.shutdown()

    @property
    def halted(self) -> bool:
        """True once the kernel loop itself has failed or was shut down."""
        return self._kernel is not None and self._kernel.halted

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current_job(self) -> JobHandle | None:
        return self._shared.running

    def create_job(
        self,
        func: JobFunc,
        name: str,
        /,
        *args: Any,  # noqa: ANN401
        callback: Callback | None = None,
    ) -> JobHandle:
        """Register a job and queue it for its first resume.

        Args:
            func: Job body. A plain function completes on its first resume;
                a generator or `async def` function may suspend.
            name: Diagnostic label used in log messages.
            *args: Arguments of the first resume.
            callback: Called with the job's result values on completion.

        Returns:
            The handle identifying the new job.

        Raises:
            SchedulerClosedError: The kernel has been shut down.
            RuntimeError: The host could not arm the first kernel cycle;
                the job is not registered.

        """
        if self._closed:
            raise SchedulerClosedError("create_job")

        record = self._shared.table.register(
            name=name,
            execution=Execution(func),
            pass_in=args,
            callback=callback,
        )
        self._shared.queue.push(record.handle)

        if self._kernel is None:
            kernel = Kernel(
                shared=self._shared,
                dispatcher=self._dispatcher,
                config=self.config,
                host=self._host,
                clock=self._clock,
            )
            try:
                kernel.bootstrap()
            except Exception:
                self._shared.unqueue(record.handle)
                _ = self._shared.table.delete(record.handle)
                raise
            self._kernel = kernel
        return record.handle

    def resume_job(
        self,
        handle: JobHandle,
        *values: Any,  # noqa: ANN401
    ) -> None:
        """Wake a waiting job, handing it `values` as the result of its wait.

        Has no effect unless the job is currently waiting.
        """
        _ = self._dispatcher.resume_job(handle, *values)

    def wait(self, handle: JobHandle | None = None) -> WaitFor:
        """Suspend the running job; see `WaitFor`.

        Must be awaited from inside a job body.
        """
        return WaitFor(self._shared, handle)

    def timeout(self) -> Timeout:
        """Give way to the next ready job if the burst time is used up.

        Must be awaited from inside a job body.
        """
        return Timeout(
            self._shared,
            clock=self._clock,
            burst_time=self.config.burst_time,
        )

    def retrieve_results(self, handle: JobHandle) -> Values | None:
        """Pull the buffered result values of a job.

        A completed job is removed once its results are read, so only the
        first call after completion sees them.

        Returns:
            The values, or `None` for an unknown or already consumed job.

        """
        record = self._shared.table.get(handle)
        if record is None:
            return None
        return self._shared.consume(record)

    def discard(self, handle: JobHandle) -> bool:
        """Drop a completed job's results without reading them."""
        record = self._shared.table.get(handle)
        if record is None or not record.is_done():
            return False
        return self._shared.table.delete(handle)

    def status(self, handle: JobHandle) -> JobStatus | None:
        record = self._shared.table.get(handle)
        return record.status if record is not None else None

    def find_job(self, handle: JobHandle) -> JobInfo | None:
        record = self._shared.table.get(handle)
        return record.info() if record is not None else None

    def get_active_jobs(self) -> list[JobInfo]:
        """Return every job the kernel still holds, finished ones included."""
        return [record.info() for record in self._shared.table]

    def shutdown(self) -> None:
        """Stop the kernel loop and refuse new jobs.

        Suspended job bodies are closed; their records stay readable.
        """
        if self._closed:
            return
        self._closed = True
        if self._kernel is not None:
            self._kernel.stop()
        for record in self._shared.table:
            if record.handle == self._shared.running:
                continue
            try:
                record.execution.close()
            except Exception:
                logger.exception("Closing job %r failed", record.name)
        logger.debug("Kernel shut down with %d jobs", len(self._shared.table))
