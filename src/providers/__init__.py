"""Item source implementations.

This module contains concrete implementations of the ItemSource protocol
defined in src/core/providers.py.
"""

from src.providers.tmdb_provider import TMDBTrendingSource, parse_trending

__all__ = [
    "TMDBTrendingSource",
    "parse_trending",
]
