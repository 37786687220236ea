"""Feed orchestration: id list, pagination and the append-only story stream."""

import threading
from concurrent.futures import FIRST_COMPLETED, Executor, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from hn_reader.config import BATCH_SIZE, MAX_WORKERS, NEAR_END_THRESHOLD, POLL_INTERVAL
from hn_reader.core.epoch import Epoch
from hn_reader.core.feed.pager import FeedPager
from hn_reader.core.resolver import ItemResolver
from hn_reader.errors import FetchError
from hn_reader.models.item import FeedType, Item, ItemRole
from hn_reader.protocols import FeedListener, ItemStoreProtocol


class FeedState(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class FeedSnapshot:
    """The id list of one feed load, tagged with the generation it belongs to."""

    feed_type: FeedType
    generation: int
    pager: FeedPager
    dispatched: set[int] = field(default_factory=set)

    @property
    def ordered_ids(self) -> tuple[int, ...]:
        return self.pager.ordered_ids

    @property
    def cursor(self) -> int:
        return self.pager.cursor


class FeedController:
    """Loads a feed page by page into an append-only stream of stories.

    Stories of a page are fetched concurrently and appended in the order they
    finish, not in feed order. Only the thread running ``load_feed`` or
    ``load_more`` appends to the stream or calls the listener. Listener
    callbacks may call back into the controller, e.g. to retry or switch feeds;
    a ``load_more`` issued from a callback is ignored.
    """

    def __init__(
        self,
        store: ItemStoreProtocol,
        *,
        listener: FeedListener | None = None,
        executor: Executor | None = None,
        max_workers: int = MAX_WORKERS,
        batch_size: int = BATCH_SIZE,
        near_end_threshold: int = NEAR_END_THRESHOLD,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self._store = store
        self._resolver = ItemResolver(store)
        self._listener = listener
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="hn-feed"
        )
        self.batch_size = batch_size
        self.near_end_threshold = near_end_threshold
        self.poll_interval = poll_interval

        self._epoch = Epoch()
        # Reentrant so a listener may call back into the controller.
        self._loading = threading.RLock()
        self._stream_lock = threading.RLock()
        self._draining = False
        self._snapshot: FeedSnapshot | None = None
        self._items: list[Item] = []
        self._feed_type: FeedType | None = None
        self.state = FeedState.EMPTY
        self.error: FetchError | None = None

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(self._items)

    @property
    def feed_type(self) -> FeedType | None:
        return self._feed_type

    @property
    def snapshot(self) -> FeedSnapshot | None:
        return self._snapshot

    @property
    def exhausted(self) -> bool:
        return self._snapshot is None or self._snapshot.pager.exhausted

    def find_item(self, item_id: int) -> Item | None:
        return next((item for item in self._items if item.id == item_id), None)

    def load_feed(self, feed_type: FeedType | str) -> int:
        """Replace the current feed with ``feed_type`` and load its first page.

        Work still in flight for the previous feed is abandoned. If the id
        list cannot be fetched the controller ends up in ``FeedState.ERROR``
        with an empty stream.

        Returns:
            Number of stories appended from the first page.
        """
        feed_type = FeedType(feed_type)
        with self._stream_lock:
            generation = self._epoch.advance()
            self._feed_type = feed_type
            self._snapshot = None
            self._items = []
            self.error = None
            self.state = FeedState.LOADING
            if self._listener:
                self._listener.on_feed_reset(feed_type.value)

        try:
            ids = self._store.fetch_id_list(feed_type.value)
        except FetchError as e:
            with self._stream_lock:
                if self._epoch.is_current(generation):
                    logger.warning("Failed to load feed {}: {}", feed_type.value, e)
                    self.state = FeedState.ERROR
                    self.error = e
                    if self._listener:
                        self._listener.on_feed_error(feed_type.value, e)
            return 0

        if not self._epoch.is_current(generation):
            return 0
        # Blocks until a load of the previous snapshot notices it is stale.
        with self._loading:
            if not self._epoch.is_current(generation):
                return 0
            self._snapshot = FeedSnapshot(
                feed_type=feed_type, generation=generation, pager=FeedPager(ids)
            )
            self.state = FeedState.READY
            logger.info("Loaded feed {}: {} ids", feed_type.value, len(ids))
            return self._load_batch(self._snapshot)

    def refresh(self) -> int:
        """Reload the current feed from scratch."""
        if self._feed_type is None:
            return 0
        return self.load_feed(self._feed_type)

    def load_more(self) -> int:
        """Load the next page; a no-op while another page is loading.

        Returns:
            Number of stories appended.
        """
        if not self._loading.acquire(blocking=False):
            logger.debug("Load already in flight, ignoring")
            return 0
        try:
            snapshot = self._snapshot
            if snapshot is None or self._draining:
                return 0
            return self._load_batch(snapshot)
        finally:
            self._loading.release()

    def on_near_end(self, last_visible_index: int | None = None) -> int:
        """Load more when the consumer is close to the end of the stream."""
        if self.exhausted:
            return 0
        if last_visible_index is not None:
            unseen = len(self._items) - 1 - last_visible_index
            if unseen > self.near_end_threshold:
                return 0
        return self.load_more()

    def _load_batch(self, snapshot: FeedSnapshot) -> int:
        batch: list[int] = []
        for item_id in snapshot.pager.next_batch(self.batch_size):
            if item_id not in snapshot.dispatched:
                snapshot.dispatched.add(item_id)
                batch.append(item_id)
        if not batch:
            return 0
        logger.debug(
            "Loading {} stories of {} (cursor {})",
            len(batch),
            snapshot.feed_type.value,
            snapshot.cursor,
        )

        pending = {self._executor.submit(self._resolver.attempt, i, ItemRole.STORY) for i in batch}
        appended = 0
        draining, self._draining = self._draining, True
        try:
            while pending:
                if not self._epoch.is_current(snapshot.generation):
                    logger.debug(
                        "Abandoning {} stories of stale feed {}",
                        len(pending),
                        snapshot.feed_type.value,
                    )
                    for future in pending:
                        future.cancel()
                    break
                done, pending = wait(
                    pending, timeout=self.poll_interval, return_when=FIRST_COMPLETED
                )
                for future in done:
                    resolution = future.result()
                    if resolution.item is not None and self._append(snapshot, resolution.item):
                        appended += 1
        finally:
            self._draining = draining
        return appended

    def _append(self, snapshot: FeedSnapshot, item: Item) -> bool:
        with self._stream_lock:
            if not self._epoch.is_current(snapshot.generation):
                return False
            self._items.append(item)
            if self._listener:
                self._listener.on_item_appended(item, len(self._items) - 1)
            return True

    def close(self) -> None:
        self._epoch.advance()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
