"""Concurrent, incremental expansion of comment trees."""

from collections.abc import Iterator, Sequence
from concurrent.futures import FIRST_COMPLETED, Executor, Future, ThreadPoolExecutor, wait

from loguru import logger

from hn_reader.config import MAX_WORKERS, POLL_INTERVAL
from hn_reader.core.epoch import Epoch
from hn_reader.core.resolver import ItemResolver, Resolution
from hn_reader.models.item import CommentArrival, CommentNode, ItemRole

_Pending = dict[Future[Resolution], tuple[CommentNode | None, int]]


class CommentExpansion:
    """One expansion of a list of comment ids, consumed by iterating it.

    Iteration dispatches every id to the worker pool and yields a
    ``CommentArrival`` for each comment as soon as it resolves; replies of a
    comment are dispatched once the comment itself has arrived. Removed or
    failed comments are skipped together with their whole subtree.

    The tree built so far is available through ``roots`` and ``nodes`` at
    any time. An expansion can be iterated once; ask the expander again to
    start over.
    """

    def __init__(
        self,
        ids: Sequence[int],
        *,
        resolver: ItemResolver,
        executor: Executor,
        epoch: Epoch,
        generation: int,
        root_id: int | None = None,
        track_visited: bool = True,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self.generation = generation
        self.roots: list[CommentNode] = []
        self.nodes: dict[int, CommentNode] = {}
        self.completed = False
        self._ids = tuple(ids)
        self._resolver = resolver
        self._executor = executor
        self._epoch = epoch
        self._track_visited = track_visited
        self._poll_interval = poll_interval
        self._visited: set[int] = set() if root_id is None else {root_id}
        self._started = False

    @property
    def stale(self) -> bool:
        return not self._epoch.is_current(self.generation)

    def __iter__(self) -> Iterator[CommentArrival]:
        if self._started:
            msg = "A comment expansion can only be iterated once"
            raise RuntimeError(msg)
        self._started = True
        if self.stale:
            return

        pending: _Pending = {}
        try:
            self._schedule(pending, self._ids, None, 0)
            while pending:
                if self.stale:
                    return
                done, _ = wait(pending, timeout=self._poll_interval, return_when=FIRST_COMPLETED)
                for future in done:
                    parent, depth = pending.pop(future)
                    resolution = future.result()
                    if resolution.item is None or self.stale:
                        continue

                    node = CommentNode(item=resolution.item)
                    self.nodes[node.item.id] = node
                    if parent is None:
                        self.roots.append(node)
                    else:
                        parent.children.append(node)

                    yield CommentArrival(
                        node=node,
                        parent_id=parent.item.id if parent else None,
                        depth=depth,
                    )
                    # The consumer may have abandoned us while suspended.
                    if self.stale:
                        return
                    self._schedule(pending, node.item.child_ids, node, depth + 1)

            self.completed = True
            logger.debug("Expansion {} complete: {} comments", self.generation, len(self.nodes))
        finally:
            # Also reached when the consumer closes the generator early.
            if pending:
                self._abandon(pending)

    def _schedule(
        self,
        pending: _Pending,
        ids: Sequence[int],
        parent: CommentNode | None,
        depth: int,
    ) -> None:
        for item_id in ids:
            if self._track_visited:
                if item_id in self._visited:
                    logger.warning("Comment {} reached twice in one tree, skipping", item_id)
                    continue
                self._visited.add(item_id)
            future = self._executor.submit(self._resolver.attempt, item_id, ItemRole.COMMENT)
            pending[future] = (parent, depth)

    def _abandon(self, pending: _Pending) -> None:
        logger.debug(
            "Abandoning expansion {} with {} fetches in flight", self.generation, len(pending)
        )
        for future in pending:
            future.cancel()
        pending.clear()


class TreeExpander:
    """Builds comment forests; only the most recent expansion stays live.

    Starting a new expansion, or calling ``abandon``, marks earlier
    expansions stale: they stop emitting and drop results that arrive late.

    With ``track_visited`` off, an id that shows up as its own descendant is
    fetched again and again; the expansion then never finishes.
    """

    def __init__(
        self,
        resolver: ItemResolver,
        *,
        executor: Executor | None = None,
        max_workers: int = MAX_WORKERS,
        track_visited: bool = True,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self._resolver = resolver
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="hn-comments"
        )
        self._epoch = Epoch()
        self.track_visited = track_visited
        self.poll_interval = poll_interval

    def expand(self, ids: Sequence[int], *, root_id: int | None = None) -> CommentExpansion:
        """Start expanding ``ids``; nothing is fetched until the result is iterated.

        Args:
            ids: Comment ids to expand, usually a story's ``child_ids``.
            root_id: Id of the item owning ``ids``, never fetched again as a reply.
        """
        return CommentExpansion(
            ids,
            resolver=self._resolver,
            executor=self._executor,
            epoch=self._epoch,
            generation=self._epoch.advance(),
            root_id=root_id,
            track_visited=self.track_visited,
            poll_interval=self.poll_interval,
        )

    def abandon(self) -> None:
        """Mark the current expansion stale."""
        self._epoch.advance()

    def close(self) -> None:
        self.abandon()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
