from __future__ import annotations

import asyncio
import functools
import logging
from abc import ABCMeta, abstractmethod
from typing import TYPE_CHECKING, ParamSpec, Protocol, TypeVar, final

from typing_extensions import override

if TYPE_CHECKING:
    from collections.abc import Callable

    from jobkernel._internal.common.types import TimerCallback

logger = logging.getLogger("jobkernel.host")

ReturnT = TypeVar("ReturnT")
ParamsT = ParamSpec("ParamsT")


def cache_result(f: Callable[ParamsT, ReturnT]) -> Callable[ParamsT, ReturnT]:
    """Cache the result of the first function call."""
    result: ReturnT | None = None

    @functools.wraps(f)
    def wrapper(*args: ParamsT.args, **kwargs: ParamsT.kwargs) -> ReturnT:
        nonlocal result
        if result is None:
            result = f(*args, **kwargs)
        return result

    return wrapper


class TimerHandle(Protocol):
    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...


class HostTimer(Protocol, metaclass=ABCMeta):
    """Deferred-callback facility the kernel borrows from its host."""

    @abstractmethod
    def after_frames(
        self,
        frames: int,
        callback: TimerCallback,
    ) -> TimerHandle:
        raise NotImplementedError

    @abstractmethod
    def after_seconds(
        self,
        seconds: float,
        callback: TimerCallback,
        *,
        repeat: bool = False,
    ) -> TimerHandle:
        raise NotImplementedError


@final
class _ChainedHandle:
    """Follows a callback that re-schedules itself on the event loop."""

    __slots__: tuple[str, ...] = ("_cancelled", "current")

    def __init__(self) -> None:
        self.current: asyncio.Handle | None = None
        self._cancelled: bool = False

    def cancel(self) -> None:
        self._cancelled = True
        if self.current is not None:
            self.current.cancel()

    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioHostTimer(HostTimer):
    """Host timer backed by an asyncio event loop.

    One frame is one pass of the event loop (``call_soon``).
    """

    def __init__(
        self,
        loop_factory: Callable[[], asyncio.AbstractEventLoop] = (
            asyncio.get_running_loop
        ),
    ) -> None:
        self.getloop: Callable[[], asyncio.AbstractEventLoop] = cache_result(
            loop_factory
        )

    @override
    def after_frames(
        self,
        frames: int,
        callback: TimerCallback,
    ) -> TimerHandle:
        loop = self.getloop()
        handle = _ChainedHandle()

        def tick(remaining: int) -> None:
            if remaining <= 1:
                callback()
                return
            handle.current = loop.call_soon(tick, remaining - 1)

        handle.current = loop.call_soon(tick, frames)
        return handle

    @override
    def after_seconds(
        self,
        seconds: float,
        callback: TimerCallback,
        *,
        repeat: bool = False,
    ) -> TimerHandle:
        loop = self.getloop()
        delay = max(seconds, 0.0)
        if not repeat:
            return loop.call_later(delay, callback)

        handle = _ChainedHandle()

        def fire() -> None:
            handle.current = loop.call_later(delay, fire)
            callback()

        handle.current = loop.call_later(delay, fire)
        logger.debug("Armed repeating host timer every %.3fs", delay)
        return handle
