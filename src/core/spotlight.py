"""Spotlight: a loader feeding a carousel.

The rendering layer subscribes to both components' snapshots, forwards
user input to the controller and calls ``select()`` for the primary action.
"""

from collections.abc import Callable

from src.core.carousel_logic import CarouselController, CarouselState
from src.core.config import SpotlightConfig
from src.core.logging import get_logger
from src.core.providers import Item, ItemSource
from src.core.resource_loader import LoadState, LoadStatus, ResourceLoader
from src.core.scheduler import Scheduler

logger = get_logger(__name__)

NavigateCallback = Callable[[int | str], None]


class Spotlight:
    """Featured-item carousel backed by a remote item source."""

    def __init__(
        self,
        source: ItemSource,
        navigate: NavigateCallback,
        config: SpotlightConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._config = config or SpotlightConfig()
        self._navigate = navigate
        self.loader: ResourceLoader[Item] = ResourceLoader(
            source.fetch,
            fetch_timeout=self._config.fetch_timeout,
            name="trending",
        )
        self.carousel = CarouselController(
            interval_ms=self._config.interval_ms,
            max_slides=self._config.max_slides,
            scheduler=scheduler,
        )
        self._featured: tuple[Item, ...] = ()
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def featured(self) -> tuple[Item, ...]:
        """Items currently shown as slides."""
        return self._featured

    @property
    def load_state(self) -> LoadState[Item]:
        return self.loader.state

    @property
    def carousel_state(self) -> CarouselState:
        return self.carousel.state

    @property
    def active_item(self) -> Item | None:
        index = self.carousel.active_index
        if index is None or index >= len(self._featured):
            return None
        return self._featured[index]

    def start(self) -> None:
        """Begin loading; the carousel activates once items arrive."""
        if self._unsubscribe is None:
            self._unsubscribe = self.loader.subscribe(self._on_load_state)
        self.loader.activate()

    def reload(self) -> None:
        """Fetch again, superseding any fetch in flight."""
        self.loader.activate()

    def stop(self) -> None:
        """Deactivate both components. Idempotent."""
        self.loader.deactivate()
        self.carousel.deactivate()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def aclose(self) -> None:
        self.stop()
        await self.loader.aclose()

    def select(self) -> int | str | None:
        """Navigate to the active item.

        Returns:
            The selected item's id, or None if no slide is active.
        """
        item = self.active_item
        if item is None:
            return None
        logger.info("spotlight_item_selected", item_id=item.id)
        self._navigate(item.id)
        return item.id

    def _on_load_state(self, state: LoadState[Item]) -> None:
        if state.status is LoadStatus.SUCCESS:
            self._featured = state.data[: self._config.max_slides]
            self.carousel.activate(len(self._featured))
        elif state.status is LoadStatus.FAILED:
            self._featured = ()
            self.carousel.deactivate()
