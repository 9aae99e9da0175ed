from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, TypeAlias, final

from typing_extensions import override

from jobkernel._internal.common.constants import EMPTY

if TYPE_CHECKING:
    from collections.abc import Coroutine, Generator

    from jobkernel._internal.common.types import JobFunc, Values

    Steps: TypeAlias = (
        Generator[Any, Values, Any] | Coroutine[Any, Values, Any]
    )

# Yielded by the scheduler primitives; a suspension that carries no values.
SUSPEND: Final[object] = object()


@dataclass(slots=True, frozen=True)
class Success:
    values: Values = ()


@dataclass(slots=True, frozen=True)
class Failure:
    error: Exception

    @property
    def values(self) -> Values:
        return (self.error,)


Outcome: TypeAlias = "Success | Failure"


def as_values(result: Any) -> Values:  # noqa: ANN401
    if result is None or result is SUSPEND:
        return ()
    if isinstance(result, tuple):
        return result  # pyright: ignore[reportUnknownVariableType]
    return (result,)


@final
class Execution:
    """Resumable execution state of a single job body.

    The body is called with the values of the first resume. A generator or
    coroutine returned by it is then stepped with ``send`` on every later
    resume; any other return value completes the execution at once.
    """

    __slots__: tuple[str, ...] = ("_func", "_steps", "finished")

    def __init__(self, func: JobFunc) -> None:
        self._func: JobFunc = func
        self._steps: Steps = EMPTY
        self.finished: bool = False

    @override
    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", repr(self._func))
        state = "finished" if self.finished else "pending"
        return f"{self.__class__.__qualname__}({name}, {state})"

    def resume(self, values: Values = ()) -> Outcome:
        if self.finished:
            msg = "Cannot resume an execution that has already finished."
            raise RuntimeError(msg)
        try:
            if self._steps is EMPTY:
                return self._start(values)
            return self._step(values)
        except Exception as exc:  # noqa: BLE001
            self.finished = True
            return Failure(exc)

    def close(self) -> None:
        steps, finished = self._steps, self.finished
        self.finished = True
        if steps is not EMPTY and not finished:
            steps.close()

    def _start(self, values: Values) -> Outcome:
        result = self._func(*values)
        if inspect.isgenerator(result) or inspect.iscoroutine(result):
            self._steps = result
            return self._step(None)
        self.finished = True
        return Success(as_values(result))

    def _step(self, values: Values | None) -> Outcome:
        try:
            yielded = self._steps.send(values)  # type: ignore[arg-type]
        except StopIteration as exc:
            self.finished = True
            return Success(as_values(exc.value))
        return Success(as_values(yielded))
