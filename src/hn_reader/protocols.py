"""Protocols for dependency injection in the reader."""

from typing import Protocol, runtime_checkable

from hn_reader.errors import FetchError
from hn_reader.models.item import Item


@runtime_checkable
class ItemStoreProtocol(Protocol):
    """Protocol for Hacker News API clients."""

    def fetch_item(self, item_id: int) -> Item:
        """Fetch a single item by id."""
        ...

    def fetch_id_list(self, feed_type: str) -> list[int]:
        """Fetch the ordered ids of a feed."""
        ...


@runtime_checkable
class FeedListener(Protocol):
    """Receives feed events from the thread that owns the feed stream."""

    def on_feed_reset(self, feed_type: str) -> None:
        """A new feed started loading; drop everything shown so far."""
        ...

    def on_item_appended(self, item: Item, position: int) -> None:
        """A story was appended at ``position``."""
        ...

    def on_feed_error(self, feed_type: str, error: FetchError) -> None:
        """The id list of the feed could not be fetched."""
        ...
