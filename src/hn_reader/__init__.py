"""Read-only Hacker News client with incremental feed and comment loading."""

from hn_reader.api import HackerNewsApi
from hn_reader.core.feed.controller import FeedController, FeedSnapshot, FeedState
from hn_reader.core.feed.pager import FeedPager
from hn_reader.core.resolver import ItemResolver, Resolution
from hn_reader.core.tree.expander import CommentExpansion, TreeExpander
from hn_reader.errors import FetchError, ItemRemoved, NetworkError, NotFound, ParseError
from hn_reader.models.item import CommentArrival, CommentNode, FeedType, Item, ItemRole
from hn_reader.protocols import FeedListener, ItemStoreProtocol
from hn_reader.reader import HackerNewsReader

__all__ = [
    "CommentArrival",
    "CommentExpansion",
    "CommentNode",
    "FeedController",
    "FeedListener",
    "FeedPager",
    "FeedSnapshot",
    "FeedState",
    "FeedType",
    "FetchError",
    "HackerNewsApi",
    "HackerNewsReader",
    "Item",
    "ItemRemoved",
    "ItemResolver",
    "ItemRole",
    "ItemStoreProtocol",
    "NetworkError",
    "NotFound",
    "ParseError",
    "Resolution",
    "TreeExpander",
]
