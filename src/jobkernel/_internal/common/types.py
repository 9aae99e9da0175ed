from collections.abc import Callable
from typing import Any, TypeAlias

Values: TypeAlias = tuple[Any, ...]
JobFunc: TypeAlias = Callable[..., Any]
Callback: TypeAlias = Callable[..., Any]
Clock: TypeAlias = Callable[[], float]
TimerCallback: TypeAlias = Callable[[], None]
