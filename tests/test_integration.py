import asyncio
from collections.abc import Generator
from typing import Any
from unittest.mock import Mock

import pytest

from jobkernel import JobHandle, JobKernel


async def test_jobs_run_on_event_loop() -> None:
    kernel = JobKernel(cycle_time=0.01, up_ratio=0.5, burst_ratio=0.5)
    finished = asyncio.Event()
    results: list[Any] = []

    def count(limit: int) -> Generator[Any, Any, int]:
        total = 0
        for i in range(limit):
            total += i
            yield from kernel.timeout()
        return total

    async def collect(first: JobHandle, second: JobHandle) -> tuple[Any, ...]:
        left = await kernel.wait(first)
        right = await kernel.wait(second)
        return left + right

    def on_done(*values: Any) -> None:
        results.extend(values)
        finished.set()

    with kernel:
        a = kernel.create_job(count, "a", 100)
        b = kernel.create_job(count, "b", 10)
        _ = kernel.create_job(collect, "collect", a, b, callback=on_done)

        await asyncio.wait_for(finished.wait(), timeout=5)

        assert results == [4950, 45]
        assert kernel.status(a) is None
        assert kernel.status(b) is None
        assert not kernel.halted

    assert kernel.closed


def test_create_job_outside_event_loop() -> None:
    kernel = JobKernel(cycle_time=0.01)

    with pytest.raises(RuntimeError):
        _ = kernel.create_job(Mock(), "first")
    assert kernel.get_active_jobs() == []

    async def main() -> tuple[Any, ...]:
        finished = asyncio.Event()
        results: list[Any] = []

        def on_done(*values: Any) -> None:
            results.extend(values)
            finished.set()

        _ = kernel.create_job(lambda: "ok", "second", callback=on_done)
        await asyncio.wait_for(finished.wait(), timeout=5)
        return tuple(results)

    assert asyncio.run(main()) == ("ok",)
    kernel.shutdown()
