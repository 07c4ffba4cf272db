"""Shared pytest fixtures for spotlight tests."""

import pytest

from src.core.carousel_logic import CarouselController, CarouselState
from tests.mocks.providers import MockItemSource
from tests.mocks.scheduler import ManualScheduler

# Configure pytest-asyncio for async tests
pytest_plugins = ["pytest_asyncio"]


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Provide a scheduler driven by a manual clock.

    Returns:
        ManualScheduler: Timers fire only when the test calls advance().
    """
    return ManualScheduler()


@pytest.fixture
def controller(scheduler: ManualScheduler) -> CarouselController:
    """Provide a carousel controller with a 6 second interval on the manual clock."""
    return CarouselController(interval_ms=6000, max_slides=5, scheduler=scheduler)


@pytest.fixture
def emitted(controller: CarouselController) -> list[CarouselState]:
    """Collect every state the controller emits."""
    states: list[CarouselState] = []
    controller.subscribe(states.append)
    return states


@pytest.fixture
def mock_source() -> MockItemSource:
    """Provide an item source that returns three items immediately."""
    return MockItemSource()


@pytest.fixture
def manual_source() -> MockItemSource:
    """Provide an item source whose fetches complete only when told to."""
    return MockItemSource(manual=True)
