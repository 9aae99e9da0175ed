from __future__ import annotations

from dataclasses import dataclass

from jobkernel._internal.common.constants import (
    DEFAULT_BURST_RATIO,
    DEFAULT_CYCLE_TIME,
    DEFAULT_UP_RATIO,
)


@dataclass(slots=True, kw_only=True, frozen=True)
class KernelConfiguration:
    """Timing budget of the kernel loop.

    Each cycle lasts ``cycle_time`` seconds. The first ``up_time`` of it is
    spent dispatching jobs; a single job is expected to call ``timeout()``
    once it has been running for longer than ``burst_time``.
    """

    cycle_time: float = DEFAULT_CYCLE_TIME
    up_ratio: float = DEFAULT_UP_RATIO
    burst_ratio: float = DEFAULT_BURST_RATIO

    def __post_init__(self) -> None:
        if self.cycle_time <= 0:
            msg = f"cycle_time must be > 0, got {self.cycle_time!r}."
            raise ValueError(msg)
        for name in ("up_ratio", "burst_ratio"):
            value: float = getattr(self, name)
            if not 0 < value <= 1:
                msg = f"{name} must be in the range (0, 1], got {value!r}."
                raise ValueError(msg)

    @property
    def up_time(self) -> float:
        return self.cycle_time * self.up_ratio

    @property
    def burst_time(self) -> float:
        return self.cycle_time * self.up_ratio * self.burst_ratio
