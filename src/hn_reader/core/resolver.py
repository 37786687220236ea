"""Fetch single items and decide whether they are shown."""

from dataclasses import dataclass

from loguru import logger

from hn_reader.errors import FetchError, ItemRemoved
from hn_reader.models.item import Item, ItemRole
from hn_reader.protocols import ItemStoreProtocol


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one id; exactly one of ``item`` and ``error`` is set."""

    item_id: int
    role: ItemRole
    item: Item | None = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.item is not None


class ItemResolver:
    """Wraps the item store with the drop policy for stories and comments."""

    def __init__(self, store: ItemStoreProtocol) -> None:
        self._store = store

    def resolve(self, item_id: int, role: ItemRole) -> Item:
        """Fetch an item, rejecting deleted or dead comments.

        Raises:
            FetchError: The item could not be fetched, or it is a removed comment.
        """
        item = self._store.fetch_item(item_id)
        if role is ItemRole.COMMENT and item.removed:
            state = "deleted" if item.deleted else "dead"
            msg = f"Comment {item_id} is {state}"
            raise ItemRemoved(msg, item_id=item_id)
        return item

    def attempt(self, item_id: int, role: ItemRole) -> Resolution:
        """Resolve without raising fetch failures. Runs on worker threads."""
        try:
            item = self.resolve(item_id, role)
        except FetchError as e:
            logger.debug("Dropping {} {}: {}", role.value, item_id, e)
            return Resolution(item_id=item_id, role=role, error=e)
        return Resolution(item_id=item_id, role=role, item=item)
