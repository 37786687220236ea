"""Domain models for Hacker News items and comment trees."""

from dataclasses import dataclass, field
from enum import Enum


class FeedType(str, Enum):
    """Named feeds exposed by the API, valued by their endpoint name."""

    TOP = "topstories"
    NEW = "newstories"
    BEST = "beststories"
    ASK = "askstories"
    SHOW = "showstories"
    JOB = "jobstories"


class ItemRole(str, Enum):
    """How an item was reached: from a feed list or from another item's kids."""

    STORY = "story"
    COMMENT = "comment"


@dataclass(frozen=True)
class Item:
    """A single item (story, comment, job...) as returned by the API."""

    id: int
    title: str | None = None
    author: str | None = None
    created_at: int = 0
    score: int = 0
    url: str | None = None
    text: str | None = None
    child_ids: tuple[int, ...] = ()
    deleted: bool = False
    dead: bool = False
    kind: str | None = None
    descendants: int | None = None
    parent_id: int | None = None

    @property
    def child_count(self) -> int:
        return len(self.child_ids)

    @property
    def removed(self) -> bool:
        return self.deleted or self.dead


@dataclass
class CommentNode:
    """A resolved comment and the replies that have arrived so far.

    ``children`` is filled in arrival order; use ``ordered_children`` for the
    order the API lists them in.
    """

    item: Item
    children: list["CommentNode"] = field(default_factory=list)
    resolved: bool = True

    @property
    def child_count(self) -> int:
        return self.item.child_count

    def ordered_children(self) -> list["CommentNode"]:
        position = {child_id: i for i, child_id in enumerate(self.item.child_ids)}
        return sorted(self.children, key=lambda n: position.get(n.item.id, len(position)))

    def walk(self) -> list["CommentNode"]:
        """Return this node and its descendants in canonical pre-order."""
        out: list[CommentNode] = []
        todo: list[CommentNode] = [self]
        while todo:
            node = todo.pop()
            out.append(node)
            todo.extend(reversed(node.ordered_children()))
        return out


@dataclass(frozen=True)
class CommentArrival:
    """Emitted once per comment as it lands in the tree."""

    node: CommentNode
    parent_id: int | None
    depth: int
