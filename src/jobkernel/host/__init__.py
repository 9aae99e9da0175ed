"""Host integration points of the jobkernel scheduler.

The kernel never sleeps on its own. It is re-entered by a host timer:
`AsyncioHostTimer` drives it from an asyncio event loop, and any object
implementing `HostTimer` can drive it from another host.
"""

from jobkernel._internal.host import AsyncioHostTimer, HostTimer, TimerHandle

__all__ = (
    "AsyncioHostTimer",
    "HostTimer",
    "TimerHandle",
)
