"""Test doubles for item sources and timer scheduling."""

from tests.mocks.providers import MockItemSource, make_items
from tests.mocks.scheduler import ManualScheduler, ManualTimer

__all__ = [
    "ManualScheduler",
    "ManualTimer",
    "MockItemSource",
    "make_items",
]
