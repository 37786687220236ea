"""Typed failures raised while fetching from the Hacker News API."""


class FetchError(Exception):
    """Base class for anything that prevents an item or feed from being fetched."""

    def __init__(self, message: str, *, item_id: int | None = None) -> None:
        super().__init__(message)
        self.item_id = item_id


class NetworkError(FetchError):
    """Transport failure: DNS, connection, timeout or a non-2xx response."""


class ParseError(FetchError):
    """The response body was not the JSON shape we expected."""


class NotFound(FetchError):
    """The item id resolved to JSON ``null``."""


class ItemRemoved(FetchError):
    """A comment that is deleted or dead; dropped like any other failure."""
