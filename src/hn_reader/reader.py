"""Entry point for presentation layers: feed selection, paging and story detail."""

from concurrent.futures import ThreadPoolExecutor
from types import TracebackType

from loguru import logger

from hn_reader.api import HackerNewsApi
from hn_reader.config import BATCH_SIZE, MAX_WORKERS, POLL_INTERVAL
from hn_reader.core.feed.controller import FeedController
from hn_reader.core.resolver import ItemResolver
from hn_reader.core.tree.expander import CommentExpansion, TreeExpander
from hn_reader.models.item import FeedType, Item, ItemRole
from hn_reader.protocols import FeedListener, ItemStoreProtocol


class HackerNewsReader:
    """Wires the feed controller and the comment expander to one worker pool.

    A presentation layer forwards its events here (feed switched, scrolled
    near the end, story opened, back pressed) and renders what comes out:
    feed events through ``listener`` and comment arrivals by iterating the
    expansion returned from ``on_story_selected``.
    """

    def __init__(
        self,
        store: ItemStoreProtocol | None = None,
        *,
        listener: FeedListener | None = None,
        max_workers: int = MAX_WORKERS,
        batch_size: int = BATCH_SIZE,
        poll_interval: float = POLL_INTERVAL,
        track_visited: bool = True,
    ) -> None:
        self.store = store if store is not None else HackerNewsApi()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="hn-reader")
        self._resolver = ItemResolver(self.store)
        self.feed = FeedController(
            self.store,
            listener=listener,
            executor=self._executor,
            batch_size=batch_size,
            poll_interval=poll_interval,
        )
        self.comments = TreeExpander(
            self._resolver,
            executor=self._executor,
            track_visited=track_visited,
            poll_interval=poll_interval,
        )
        self.story: Item | None = None

    def on_feed_type_changed(self, feed_type: FeedType | str) -> int:
        self.on_navigate_back()
        return self.feed.load_feed(feed_type)

    def on_near_end_of_list(self, last_visible_index: int | None = None) -> int:
        return self.feed.on_near_end(last_visible_index)

    def refresh(self) -> int:
        return self.feed.refresh()

    def on_story_selected(self, story_id: int) -> CommentExpansion:
        """Open a story and start expanding its comments.

        The story is taken from the feed stream when present, otherwise
        fetched.

        Raises:
            FetchError: The story is not in the feed and could not be fetched.
        """
        story = self.open_story(story_id)
        logger.debug("Opening story {} with {} top-level comments", story.id, story.child_count)
        return self.comments.expand(story.child_ids, root_id=story.id)

    def open_story(self, story_id: int) -> Item:
        """Make ``story_id`` the current story without touching its comments."""
        story = self.feed.find_item(story_id)
        if story is None:
            story = self._resolver.resolve(story_id, ItemRole.STORY)
        self.story = story
        return story

    def on_navigate_back(self) -> None:
        """Leave the story view; its pending comments are discarded."""
        self.story = None
        self.comments.abandon()

    def close(self) -> None:
        self.feed.close()
        self.comments.close()
        self._executor.shutdown(wait=False, cancel_futures=True)
        close_store = getattr(self.store, "close", None)
        if callable(close_store):
            close_store()

    def __enter__(self) -> "HackerNewsReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
