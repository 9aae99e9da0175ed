from enum import Enum, unique
from typing import Any

from jobkernel._internal.common.datastructures import EmptyPlaceholder

EMPTY: Any = EmptyPlaceholder()

DEFAULT_CYCLE_TIME = 1.0
DEFAULT_UP_RATIO = 0.5
DEFAULT_BURST_RATIO = 0.1
BOOTSTRAP_FRAMES = 1


@unique
class JobStatus(str, Enum):
    READY = "ready"
    RUNNING = "running"
    WAITING = "waiting"
    DONE = "done"
