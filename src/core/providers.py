"""Item model and the item source protocol.

Sources can use TMDB or any other backend that returns an ordered
collection of items carrying an identifier. Fields beyond ``id`` are opaque
to the carousel and are passed through to the rendering layer unmodified.
"""

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict


class Item(BaseModel):
    """A featured item in the spotlight collection.

    Only ``id`` is validated. Every other field is kept exactly as the
    source sent it, including its type, so one odd entry cannot fail the
    whole collection.

    Attributes:
        id: Unique identifier, passed to the navigate callback on selection.
        title: Display title, if the source provides one.
        backdrop_path: Path of the wide background image.
        poster_path: Path of the portrait poster image.
        release_date: Release date as provided by the source.
        vote_average: Average rating.
        overview: Synopsis text.
    """

    id: int | str
    title: Any = None
    backdrop_path: Any = None
    poster_path: Any = None
    release_date: Any = None
    vote_average: Any = None
    overview: Any = None

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 693134,
                "title": "Dune: Part Two",
                "backdrop_path": "/xOMo8BRK7PfcJv9JCnx7s5hj0PX.jpg",
                "poster_path": "/1pdfLvkbY9ohJlCjQH2CZjjYVvJ.jpg",
                "release_date": "2024-02-27",
                "vote_average": 8.2,
                "overview": "Follow the mythic journey of Paul Atreides...",
            }
        },
    )

    @property
    def display_title(self) -> Any:
        """``title``, or ``name`` for TV entries in the trending feed."""
        if self.title:
            return self.title
        return (self.model_extra or {}).get("name")


class ItemSource(Protocol):
    """Protocol for remote item collections.

    Implementations raise a FetchError subclass (TransportFailure,
    NonSuccessResponse or PayloadParseFailure) on failure.
    """

    async def fetch(self) -> list[Item]:
        """Fetch the current collection.

        Returns:
            Items in display order.
        """
        ...
