from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jobkernel._internal.common.constants import BOOTSTRAP_FRAMES

if TYPE_CHECKING:
    from collections.abc import Generator

    from jobkernel._internal.common.types import Clock
    from jobkernel._internal.configuration import KernelConfiguration
    from jobkernel._internal.dispatch import Dispatcher
    from jobkernel._internal.host import HostTimer, TimerHandle
    from jobkernel._internal.shared_state import SharedState

logger = logging.getLogger("jobkernel.kernel")


def next_delay(config: KernelConfiguration, elapsed: float) -> float:
    """Idle time before the next cycle.

    Normally the rest of the cycle. Once the active window overran, the
    delay is never shorter than the overrun itself.
    """
    overrun = max(elapsed - config.up_time, 0.0)
    return max(config.cycle_time - elapsed, overrun)


class Kernel:
    """The scheduling loop.

    The loop is a generator: each resume runs one active window, arms the
    host timer for the next cycle and suspends again.
    """

    __slots__: tuple[str, ...] = (
        "_clock",
        "_config",
        "_dispatcher",
        "_handle",
        "_host",
        "_loop",
        "_shared",
        "cycles",
        "halted",
    )

    def __init__(  # noqa: PLR0913
        self,
        *,
        shared: SharedState,
        dispatcher: Dispatcher,
        config: KernelConfiguration,
        host: HostTimer,
        clock: Clock,
    ) -> None:
        self._shared: SharedState = shared
        self._dispatcher: Dispatcher = dispatcher
        self._config: KernelConfiguration = config
        self._host: HostTimer = host
        self._clock: Clock = clock
        self._handle: TimerHandle | None = None
        self._loop: Generator[None, None, None] = self._run()
        self.cycles: int = 0
        self.halted: bool = False

    def bootstrap(self) -> None:
        self._handle = self._host.after_frames(BOOTSTRAP_FRAMES, self.resume)

    def resume(self) -> None:
        if self.halted:
            return
        try:
            next(self._loop)
        except StopIteration:
            return
        except Exception:
            self.halted = True
            logger.exception("Kernel failed, job processing is halted")

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.halted = True

    def _run(self) -> Generator[None, None, None]:
        queue = self._shared.queue
        up_time = self._config.up_time
        while True:
            started = self._clock()
            elapsed = 0.0
            while queue.has_next() and elapsed < up_time:
                self._dispatcher.start_job(queue.peek())
                elapsed = self._clock() - started
                if self.halted:
                    return

            delay = next_delay(self._config, elapsed)
            self._handle = self._host.after_seconds(delay, self.resume)
            self.cycles += 1
            logger.debug(
                "Cycle %d used %.3fs, next cycle in %.3fs",
                self.cycles,
                elapsed,
                delay,
            )
            yield
