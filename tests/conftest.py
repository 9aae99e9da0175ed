from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest
from typing_extensions import override

from jobkernel import JobKernel
from jobkernel.host import HostTimer


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now: float = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass(slots=True)
class FakeHandle:
    delay: float
    callback: Callable[[], None]
    frames: int = 0
    _cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class FakeHost(HostTimer):
    """Host timer that fires only when the test asks it to."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock: FakeClock = clock
        self.pending: list[FakeHandle] = []
        self.armed: list[FakeHandle] = []

    @override
    def after_frames(
        self,
        frames: int,
        callback: Callable[[], None],
    ) -> FakeHandle:
        handle = FakeHandle(0.0, callback, frames=frames)
        self.pending.append(handle)
        self.armed.append(handle)
        return handle

    @override
    def after_seconds(
        self,
        seconds: float,
        callback: Callable[[], None],
        *,
        repeat: bool = False,
    ) -> FakeHandle:
        handle = FakeHandle(seconds, callback)
        self.pending.append(handle)
        self.armed.append(handle)
        return handle

    def fire(self) -> bool:
        while self.pending:
            handle = self.pending.pop(0)
            if handle.cancelled():
                continue
            self.clock.advance(handle.delay)
            handle.callback()
            return True
        return False

    def run(self, cycles: int) -> None:
        for _ in range(cycles):
            if not self.fire():
                return


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def host(clock: FakeClock) -> FakeHost:
    return FakeHost(clock)


@pytest.fixture
def kernel(clock: FakeClock, host: FakeHost) -> JobKernel:
    return create_kernel(clock, host)


def create_kernel(
    clock: FakeClock,
    host: FakeHost,
    *,
    cycle_time: float = 10.0,
    up_ratio: float = 0.5,
    burst_ratio: float = 0.1,
) -> JobKernel:
    return JobKernel(
        cycle_time=cycle_time,
        up_ratio=up_ratio,
        burst_ratio=burst_ratio,
        host=host,
        clock=clock,
    )
