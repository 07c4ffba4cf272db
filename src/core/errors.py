"""Error taxonomy for the spotlight carousel and its data loader.

Navigation errors are programmer/input errors and are raised to the caller.
Fetch errors are recovered by the loader and surfaced through its state,
never raised past it.

Example:
    from src.core.errors import FetchError, FetchErrorKind, classify_error

    try:
        items = await source.fetch()
    except Exception as ex:
        error = FetchError.from_exception(ex)
        if error.kind is FetchErrorKind.NON_SUCCESS_RESPONSE:
            ...
"""

import asyncio
import json
from enum import Enum, auto

import aiohttp
from pydantic import ValidationError

from src.core.logging import get_logger

logger = get_logger(__name__)


class SpotlightError(Exception):
    """Base exception for all spotlight errors."""


class ConfigurationError(SpotlightError):
    """Invalid or missing configuration."""


class NavigationOutOfRange(SpotlightError, IndexError):
    """Raised when navigating to an index outside the carousel's slides.

    Attributes:
        index: The requested index.
        slide_count: Number of slides at the time of the call.
    """

    def __init__(self, index: int, slide_count: int) -> None:
        if slide_count == 0:
            message = f"Cannot navigate to slide {index}: carousel is inactive"
        else:
            message = (
                f"Slide index {index} out of range for {slide_count} slides"
            )
        super().__init__(message)
        self.index = index
        self.slide_count = slide_count


class FetchErrorKind(Enum):
    """Classification of fetch failures."""

    TRANSPORT = auto()  # Network failure, timeout, connection reset
    NON_SUCCESS_RESPONSE = auto()  # Server answered with a non-2xx status
    PAYLOAD_PARSE = auto()  # Body was not the expected collection


class FetchError(SpotlightError):
    """A failed attempt to fetch the item collection.

    Attributes:
        kind: Which of the three failure kinds occurred.
        original_error: The underlying exception, if any.
    """

    kind: FetchErrorKind = FetchErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        kind: FetchErrorKind | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind
        self.original_error = original_error

    @property
    def message(self) -> str:
        return str(self)

    @classmethod
    def from_exception(cls, ex: BaseException) -> "FetchError":
        """Wrap an arbitrary exception in the matching FetchError subclass."""
        if isinstance(ex, FetchError):
            return ex

        kind = classify_error(ex)
        detail = str(ex) or type(ex).__name__
        if isinstance(ex, aiohttp.ClientResponseError) and (
            kind is FetchErrorKind.NON_SUCCESS_RESPONSE
        ):
            return NonSuccessResponse(ex.status, ex.message, original_error=ex)
        if kind is FetchErrorKind.PAYLOAD_PARSE:
            return PayloadParseFailure(
                f"Malformed payload: {detail}", original_error=ex
            )
        return TransportFailure(f"Transport error: {detail}", original_error=ex)


class TransportFailure(FetchError):
    """The request never produced a response (network, DNS, timeout)."""

    kind = FetchErrorKind.TRANSPORT


class NonSuccessResponse(FetchError):
    """The server responded with a non-success status code.

    Attributes:
        status_code: HTTP status returned by the server.
        reason: Reason phrase or response text, if any.
    """

    kind = FetchErrorKind.NON_SUCCESS_RESPONSE

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        original_error: BaseException | None = None,
    ) -> None:
        message = f"Request failed with status {status_code}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, original_error=original_error)
        self.status_code = status_code
        self.reason = reason


class PayloadParseFailure(FetchError):
    """The response body could not be parsed into a collection of items."""

    kind = FetchErrorKind.PAYLOAD_PARSE


def classify_error(error: BaseException) -> FetchErrorKind:
    """Classify an exception into a fetch error kind.

    Args:
        error: The exception to classify.

    Returns:
        The FetchErrorKind that best matches the error. Anything that cannot
        be attributed to a response falls back to TRANSPORT.
    """
    if isinstance(error, FetchError):
        return error.kind

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return FetchErrorKind.TRANSPORT

    if isinstance(error, aiohttp.ClientResponseError):
        if isinstance(error, aiohttp.ContentTypeError):
            return FetchErrorKind.PAYLOAD_PARSE
        return FetchErrorKind.NON_SUCCESS_RESPONSE

    if isinstance(error, (aiohttp.ClientError, OSError)):
        return FetchErrorKind.TRANSPORT

    if isinstance(
        error, (json.JSONDecodeError, ValidationError, TypeError, KeyError, ValueError)
    ):
        return FetchErrorKind.PAYLOAD_PARSE

    logger.warning(
        "unclassified_fetch_error",
        error_type=type(error).__name__,
        error=str(error),
    )
    return FetchErrorKind.TRANSPORT
