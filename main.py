"""Console demo: load trending movies and print the spotlight as it rotates."""

import asyncio
import os
from uuid import uuid4

from src.core.carousel_logic import CarouselState
from src.core.config import SpotlightConfig
from src.core.logging import (
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
)
from src.core.resource_loader import LoadState, LoadStatus
from src.core.spotlight import Spotlight
from src.providers import TMDBTrendingSource

# Configure structured logging (reads ENVIRONMENT and LOG_LEVEL from env)
configure_logging()

logger = get_logger(__name__)

# How long the demo keeps the carousel running
RUN_SECONDS = float(os.getenv("SPOTLIGHT_DEMO_SECONDS", "30"))


def create_spotlight(config: SpotlightConfig) -> Spotlight:
    """Wire a Spotlight to the TMDB source with console rendering.

    Args:
        config: Runtime configuration.

    Returns:
        A Spotlight that has not been started yet.
    """
    source = TMDBTrendingSource.from_config(config)
    spotlight = Spotlight(
        source,
        navigate=lambda item_id: logger.info("navigate", path=f"/watch/{item_id}"),
        config=config,
    )

    def render_load(state: LoadState) -> None:
        if state.status is LoadStatus.LOADING:
            logger.info("render_skeleton")
        elif state.status is LoadStatus.FAILED and state.error is not None:
            logger.error(
                "render_error", kind=state.error.kind.name, error=str(state.error)
            )
        elif state.is_empty:
            logger.info("render_empty")

    def render_slide(state: CarouselState) -> None:
        item = spotlight.active_item
        if item is None:
            return
        logger.info(
            "render_slide",
            slide=f"{state.active_index + 1}/{state.slide_count}",
            title=item.display_title,
            release_date=item.release_date,
            rating=item.vote_average,
        )

    spotlight.loader.subscribe(render_load)
    spotlight.carousel.subscribe(render_slide)
    return spotlight


async def main() -> None:
    """Run the spotlight for RUN_SECONDS, then tear it down."""
    bind_contextvars(session_id=uuid4().hex[:12])
    config = SpotlightConfig.from_env()
    spotlight = create_spotlight(config)

    logger.info(
        "spotlight_starting",
        interval_ms=config.interval_ms,
        max_slides=config.max_slides,
    )
    spotlight.start()
    try:
        await asyncio.sleep(RUN_SECONDS)
        spotlight.select()
    finally:
        await spotlight.aclose()
        logger.info("spotlight_stopped")
        clear_contextvars()


if __name__ == "__main__":
    asyncio.run(main())
