"""Timer scheduling with pluggable backends.

The carousel never sleeps; it asks a scheduler to call it back later and
keeps the returned handle so the callback can be cancelled.
"""

import asyncio
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None:
        """Cancel the callback. Cancelling twice is a no-op."""
        ...

    def cancelled(self) -> bool:
        """Return True if the callback was cancelled."""
        ...


class Scheduler(Protocol):
    """Protocol for one-shot timer backends.

    Implementations must invoke callbacks on the same thread that scheduled
    them, one at a time.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule callback to run once after delay seconds.

        Args:
            delay: Seconds to wait before invoking the callback.
            callback: Zero-argument function to invoke.

        Returns:
            A handle that cancels the pending callback.
        """
        ...


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the scheduler.

        Args:
            loop: Event loop to schedule on. Defaults to the running loop at
                the time of each call.
        """
        self._loop = loop

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
