"""Carousel business logic - platform agnostic.

The controller cycles an active index through ``[0, slide_count)`` on a
recurring timer. Manual navigation overrides the index and restarts the
timer so the next automatic advance is a full interval after the user's
action.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from src.core.config import DEFAULT_INTERVAL_MS, DEFAULT_MAX_SLIDES
from src.core.errors import NavigationOutOfRange
from src.core.logging import get_logger
from src.core.scheduler import AsyncioScheduler, Scheduler, TimerHandle

logger = get_logger(__name__)

KEY_NEXT = "ArrowRight"
KEY_PREVIOUS = "ArrowLeft"


class CarouselPhase(Enum):
    """Lifecycle phase of a carousel controller."""

    INACTIVE = "inactive"
    STATIC = "static"  # One slide, nothing to cycle through
    CYCLING = "cycling"


@dataclass(frozen=True)
class CarouselState:
    """Immutable snapshot of a carousel handed to consumers."""

    phase: CarouselPhase = CarouselPhase.INACTIVE
    slide_count: int = 0
    active_index: int | None = None

    @property
    def is_active(self) -> bool:
        return self.phase is not CarouselPhase.INACTIVE

    @property
    def is_cycling(self) -> bool:
        return self.phase is CarouselPhase.CYCLING


CarouselListener = Callable[[CarouselState], None]


class CarouselController:
    """Controls automatic and manual navigation through a set of slides.

    Example:
        controller = CarouselController(interval_ms=6000)
        controller.subscribe(lambda state: render(state.active_index))
        controller.activate(len(items))
        controller.next()
        controller.deactivate()
    """

    def __init__(
        self,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        max_slides: int = DEFAULT_MAX_SLIDES,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Initialize the controller in the inactive phase.

        Args:
            interval_ms: Milliseconds between automatic advances.
            max_slides: Cap applied to the slide count on activation.
            scheduler: Timer backend. Defaults to the asyncio event loop.
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        if max_slides <= 0:
            raise ValueError(f"max_slides must be positive, got {max_slides}")
        self._interval = interval_ms / 1000.0
        self._max_slides = max_slides
        self._scheduler: Scheduler = scheduler or AsyncioScheduler()
        self._state = CarouselState()
        self._timer: TimerHandle | None = None
        # Incremented on every arm and disarm; a tick only counts if it
        # carries the current value
        self._timer_token = 0
        self._listeners: list[CarouselListener] = []

    @property
    def state(self) -> CarouselState:
        return self._state

    @property
    def active_index(self) -> int | None:
        return self._state.active_index

    @property
    def slide_count(self) -> int:
        return self._state.slide_count

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    def subscribe(self, listener: CarouselListener) -> Callable[[], None]:
        """Register a consumer for state snapshots.

        Args:
            listener: Called with every new CarouselState.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def activate(self, slide_count: int) -> CarouselState:
        """Start managing a new collection of slides.

        Any existing timer is cancelled and the index resets to 0. Two or
        more slides start the auto-advance timer; one slide is shown
        statically; zero slides leave the controller inactive.

        Args:
            slide_count: Number of slides in the collection.

        Returns:
            The new state, which has also been emitted to listeners.

        Raises:
            ValueError: If slide_count is negative.
        """
        if slide_count < 0:
            raise ValueError(f"slide_count must be >= 0, got {slide_count}")

        count = min(slide_count, self._max_slides)
        self._disarm()

        if count == 0:
            state = CarouselState()
        elif count == 1:
            state = CarouselState(CarouselPhase.STATIC, 1, 0)
        else:
            state = CarouselState(CarouselPhase.CYCLING, count, 0)
            self._arm()

        logger.debug(
            "carousel_activated",
            requested=slide_count,
            slide_count=count,
            phase=state.phase.value,
        )
        return self._commit(state)

    def go_to(self, index: int) -> CarouselState:
        """Jump to a slide and restart the auto-advance timer.

        Args:
            index: Target slide, 0 <= index < slide_count.

        Returns:
            The new state.

        Raises:
            NavigationOutOfRange: If the index is outside the slide range or
                the controller is inactive. State is left unchanged.
        """
        current = self._state
        if not current.is_active or not 0 <= index < current.slide_count:
            raise NavigationOutOfRange(index, current.slide_count)
        return self._transition(index, restart_timer=True)

    def next(self) -> CarouselState:
        """Advance to the following slide, wrapping at the end."""
        count = self._require_active()
        return self.go_to((self._index() + 1) % count)

    def previous(self) -> CarouselState:
        """Step back to the preceding slide, wrapping at the start."""
        count = self._require_active()
        return self.go_to((self._index() - 1 + count) % count)

    def handle_key(self, key: str) -> bool:
        """Apply keyboard navigation.

        Args:
            key: Key name as reported by the input layer.

        Returns:
            True if the key moved the carousel.
        """
        if self._state.slide_count < 2:
            return False
        if key == KEY_NEXT:
            self.next()
            return True
        if key == KEY_PREVIOUS:
            self.previous()
            return True
        return False

    def deactivate(self) -> None:
        """Cancel the timer and return to the inactive phase. Idempotent."""
        if not self._state.is_active and self._timer is None:
            return
        self._disarm()
        logger.debug("carousel_deactivated", slide_count=self._state.slide_count)
        self._commit(CarouselState())

    def _require_active(self) -> int:
        count = self._state.slide_count
        if not self._state.is_active or count == 0:
            raise NavigationOutOfRange(-1, count)
        return count

    def _index(self) -> int:
        return self._state.active_index or 0

    def _transition(self, index: int, *, restart_timer: bool) -> CarouselState:
        # Cancel-before-arm happens inside one synchronous step, so no tick
        # from the old schedule can run between the index update and the
        # new timer
        current = self._state
        if restart_timer and current.is_cycling:
            self._disarm()
            self._arm()
        return self._commit(
            CarouselState(current.phase, current.slide_count, index)
        )

    def _arm(self) -> None:
        self._timer_token += 1
        token = self._timer_token
        self._timer = self._scheduler.call_later(
            self._interval, lambda: self._on_tick(token)
        )

    def _disarm(self) -> None:
        self._timer_token += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_tick(self, token: int) -> None:
        if token != self._timer_token or not self._state.is_cycling:
            logger.debug("carousel_stale_tick_ignored", token=token)
            return
        self._timer = None
        count = self._state.slide_count
        self._arm()
        self._transition((self._index() + 1) % count, restart_timer=False)

    def _commit(self, state: CarouselState) -> CarouselState:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        return state
