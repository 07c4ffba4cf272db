"""Cancellable loader for a remote collection.

Each ``activate()`` starts a new fetch attempt tagged with a generation
number. A completed attempt is committed only if its generation is still the
current one and the loader is still active; otherwise the result is dropped
without touching state or notifying listeners.

Example:
    loader = ResourceLoader(source.fetch, fetch_timeout=10.0)
    loader.subscribe(render)
    loader.activate()
    ...
    loader.deactivate()
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from src.core.errors import FetchError, TransportFailure
from src.core.logging import bind_contextvars, get_logger, unbind_contextvars

logger = get_logger(__name__)

T = TypeVar("T")


class LoadStatus(Enum):
    """Status of a load attempt."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadState(Generic[T]):
    """Immutable snapshot of the loader handed to consumers.

    ``data`` is meaningful only on SUCCESS and ``error`` only on FAILED.
    """

    status: LoadStatus = LoadStatus.IDLE
    data: tuple[T, ...] = ()
    error: FetchError | None = None
    generation: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def is_empty(self) -> bool:
        """True for a successful load that returned no items."""
        return self.status is LoadStatus.SUCCESS and not self.data


LoadListener = Callable[[LoadState[T]], None]


class ResourceLoader(Generic[T]):
    """Fetches one remote collection per activation with stale-result guarding.

    The loader must be driven from a single event loop. No retries are
    attempted; a failed attempt stays FAILED until the next activation.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Sequence[T]]],
        fetch_timeout: float | None = None,
        name: str = "resource",
    ) -> None:
        """Initialize an idle loader.

        Args:
            fetch: Coroutine function returning the collection. Failures
                should be raised as FetchError subclasses; anything else is
                classified by FetchError.from_exception.
            fetch_timeout: Optional cap in seconds on a single attempt. A
                timed-out attempt fails as a transport error.
            name: Resource name used in log events.
        """
        self._fetch = fetch
        self._fetch_timeout = fetch_timeout
        self._name = name
        self._state: LoadState[T] = LoadState()
        self._generation = 0
        self._active = False
        self._tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[LoadListener[T]] = []

    @property
    def state(self) -> LoadState[T]:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_active(self) -> bool:
        return self._active

    def subscribe(self, listener: LoadListener[T]) -> Callable[[], None]:
        """Register a consumer for state snapshots.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def activate(self) -> asyncio.Task[None]:
        """Start a new fetch attempt, superseding any attempt in flight.

        Returns:
            The task running the attempt.

        Raises:
            RuntimeError: If called outside a running event loop. State is
                left unchanged.
        """
        loop = asyncio.get_running_loop()

        self._active = True
        self._generation += 1
        generation = self._generation

        self._commit(
            LoadState(
                status=LoadStatus.LOADING,
                data=self._state.data,
                error=None,
                generation=generation,
            )
        )
        logger.debug("fetch_started", resource=self._name, generation=generation)

        task = loop.create_task(self._run(generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def deactivate(self) -> None:
        """Stop accepting results and cancel attempts in flight. Idempotent."""
        if not self._active and not self._tasks:
            return
        self._active = False
        for task in list(self._tasks):
            task.cancel()
        logger.debug(
            "loader_deactivated", resource=self._name, generation=self._generation
        )

    async def aclose(self) -> None:
        """Deactivate and wait for cancelled attempts to unwind."""
        pending = list(self._tasks)
        self.deactivate()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def _run(self, generation: int) -> None:
        # Each task runs in its own copy of the context, so these bindings
        # tag every event of this attempt, including the source's own logs
        bind_contextvars(resource=self._name, generation=generation)
        try:
            await self._attempt(generation)
        finally:
            unbind_contextvars("resource", "generation")

    async def _attempt(self, generation: int) -> None:
        try:
            if self._fetch_timeout is None:
                result = await self._fetch()
            else:
                result = await asyncio.wait_for(self._fetch(), self._fetch_timeout)
        except asyncio.CancelledError:
            logger.debug("fetch_cancelled")
            raise
        except (TimeoutError, asyncio.TimeoutError) as ex:
            message = "Fetch timed out"
            if self._fetch_timeout is not None:
                message = f"{message} after {self._fetch_timeout}s"
            error: FetchError = TransportFailure(message, original_error=ex)
            self._complete(generation, LoadStatus.FAILED, error=error)
        except Exception as ex:
            self._complete(
                generation, LoadStatus.FAILED, error=FetchError.from_exception(ex)
            )
        else:
            self._complete(generation, LoadStatus.SUCCESS, data=tuple(result))

    def _complete(
        self,
        generation: int,
        status: LoadStatus,
        data: tuple[T, ...] = (),
        error: FetchError | None = None,
    ) -> None:
        # The guard and the commit run in one synchronous step
        if generation != self._generation or not self._active:
            logger.debug(
                "fetch_discarded",
                current_generation=self._generation,
                active=self._active,
            )
            return

        if error is not None:
            logger.warning(
                "fetch_failed", kind=error.kind.name, error=str(error)
            )
        else:
            logger.info("fetch_succeeded", count=len(data))

        self._commit(
            LoadState(status=status, data=data, error=error, generation=generation)
        )

    def _commit(self, state: LoadState[T]) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
