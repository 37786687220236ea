"""Hacker News API client."""

from typing import Any

import requests
from loguru import logger

from hn_reader.config import API_BASE, REQUEST_TIMEOUT
from hn_reader.core.parsing import parse_id_list, parse_item
from hn_reader.errors import NetworkError, ParseError
from hn_reader.models.item import FeedType, Item


class HackerNewsApi:
    """Read-only accessor over the Hacker News Firebase API.

    One GET per call; nothing is retried or cached.
    """

    def __init__(self, *, base_url: str = API_BASE, timeout: float = REQUEST_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.sess = requests.Session()
        logger.debug("API ready: base_url {!r}, timeout {!r}", self.base_url, self.timeout)

    def get_json(self, path: str, *, item_id: int | None = None) -> Any:
        """GET ``{base_url}/{path}.json`` and return the decoded body."""
        url = f"{self.base_url}/{path}.json"
        logger.debug("Making request: {!r}", url)
        try:
            r = self.sess.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            msg = f"Request to {url!r} failed: {e}"
            raise NetworkError(msg, item_id=item_id) from e

        try:
            return r.json()
        except ValueError as e:
            msg = f"Malformed JSON from {url!r}: {e}"
            raise ParseError(msg, item_id=item_id) from e

    def fetch_item(self, item_id: int) -> Item:
        """Fetch and parse ``item/{id}``."""
        return parse_item(self.get_json(f"item/{item_id}", item_id=item_id), item_id=item_id)

    def fetch_id_list(self, feed_type: str) -> list[int]:
        """Fetch the ordered id list of a feed such as ``topstories``."""
        name = FeedType(feed_type).value
        return parse_id_list(self.get_json(name), feed_type=name)

    def close(self) -> None:
        self.sess.close()
