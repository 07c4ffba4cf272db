"""TMDB trending collection provider implementation.

This module fetches the weekly trending movies from The Movie Database
REST API and parses them into Item models.

API reference:
    GET https://api.themoviedb.org/3/trending/movie/week
"""

from __future__ import annotations

import asyncio

import aiohttp
from pydantic import ValidationError

from src.core.config import SpotlightConfig
from src.core.errors import (
    ConfigurationError,
    NonSuccessResponse,
    PayloadParseFailure,
    TransportFailure,
)
from src.core.logging import get_logger
from src.core.providers import Item

logger = get_logger(__name__)

TRENDING_PATH = "/trending/movie/week"


class TMDBTrendingSource:
    """Item source for TMDB's weekly trending movies.

    Each call to fetch() opens its own client session; the source holds no
    connection state between calls.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.themoviedb.org/3",
        language: str = "en-US",
        timeout: float | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            api_key: TMDB API key.
            base_url: API base address, without trailing slash.
            language: Language code sent with the request.
            timeout: Total request timeout in seconds. None leaves the
                request unbounded.

        Raises:
            ConfigurationError: If no API key is provided.
        """
        if not api_key:
            raise ConfigurationError(
                "TMDB_API_KEY is not set. "
                "Please set it or provide an api_key parameter."
            )
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._language = language
        self._timeout = timeout

    @classmethod
    def from_config(cls, config: SpotlightConfig) -> TMDBTrendingSource:
        """Create a source from a SpotlightConfig."""
        return cls(
            api_key=config.api_key,
            base_url=config.api_base_url,
            language=config.language,
            timeout=config.fetch_timeout,
        )

    @property
    def url(self) -> str:
        return f"{self._base_url}{TRENDING_PATH}"

    async def fetch(self) -> list[Item]:
        """Fetch the trending collection.

        Returns:
            Items in the order returned by the API. A payload without a
            ``results`` key yields an empty list.

        Raises:
            TransportFailure: If the request could not be completed.
            NonSuccessResponse: If the API answered with a non-2xx status.
            PayloadParseFailure: If the body is not a valid trending payload.
        """
        params = {"api_key": self._api_key, "language": self._language}

        logger.debug("tmdb_request", url=self.url)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    self.url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self._timeout),
                ) as response:
                    if not 200 <= response.status < 300:
                        reason = response.reason or ""
                        logger.error(
                            "tmdb_request_failed",
                            status=response.status,
                            reason=reason,
                        )
                        raise NonSuccessResponse(response.status, reason)

                    try:
                        data = await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as ex:
                        raise PayloadParseFailure(
                            f"TMDB response is not valid JSON: {ex}",
                            original_error=ex,
                        ) from ex

        except aiohttp.ClientError as ex:
            logger.error("tmdb_network_error", error=str(ex))
            raise TransportFailure(
                f"Network error during TMDB request: {ex}", original_error=ex
            ) from ex
        except asyncio.TimeoutError as ex:
            logger.error("tmdb_request_timeout", timeout=self._timeout)
            raise TransportFailure(
                "TMDB request timed out", original_error=ex
            ) from ex

        items = parse_trending(data)
        logger.debug("tmdb_results", count=len(items))
        return items


def parse_trending(data: object) -> list[Item]:
    """Parse a trending payload into Items.

    Args:
        data: Decoded JSON body.

    Returns:
        Parsed items in payload order.

    Raises:
        PayloadParseFailure: If the payload shape is wrong or an entry fails
            validation.
    """
    if not isinstance(data, dict):
        raise PayloadParseFailure(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    results = data.get("results")
    if results is None:
        return []
    if not isinstance(results, list):
        raise PayloadParseFailure(
            f"Expected 'results' to be a list, got {type(results).__name__}"
        )

    try:
        return [Item.model_validate(entry) for entry in results]
    except ValidationError as ex:
        raise PayloadParseFailure(
            f"Invalid item in TMDB results: {ex.error_count()} validation error(s)",
            original_error=ex,
        ) from ex
