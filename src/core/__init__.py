"""Core spotlight logic and protocols.

This module contains platform-agnostic carousel and loading logic along with
the protocol that item sources implement.
"""

from src.core.carousel_logic import CarouselController, CarouselPhase, CarouselState
from src.core.config import SpotlightConfig
from src.core.errors import (
    ConfigurationError,
    FetchError,
    FetchErrorKind,
    NavigationOutOfRange,
    NonSuccessResponse,
    PayloadParseFailure,
    SpotlightError,
    TransportFailure,
    classify_error,
)
from src.core.logging import (
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
    unbind_contextvars,
)
from src.core.providers import Item, ItemSource
from src.core.resource_loader import LoadState, LoadStatus, ResourceLoader
from src.core.scheduler import AsyncioScheduler, Scheduler, TimerHandle
from src.core.spotlight import Spotlight

__all__ = [
    # Carousel
    "CarouselController",
    "CarouselPhase",
    "CarouselState",
    # Configuration
    "SpotlightConfig",
    # Error handling
    "ConfigurationError",
    "FetchError",
    "FetchErrorKind",
    "NavigationOutOfRange",
    "NonSuccessResponse",
    "PayloadParseFailure",
    "SpotlightError",
    "TransportFailure",
    "classify_error",
    # Logging
    "bind_contextvars",
    "clear_contextvars",
    "configure_logging",
    "get_logger",
    "unbind_contextvars",
    # Items
    "Item",
    "ItemSource",
    # Loading
    "LoadState",
    "LoadStatus",
    "ResourceLoader",
    # Scheduling
    "AsyncioScheduler",
    "Scheduler",
    "TimerHandle",
    # Composition
    "Spotlight",
]
