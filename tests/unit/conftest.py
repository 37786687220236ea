"""Shared test fixtures."""

from collections.abc import Iterator

import pytest

from hn_reader.core.resolver import ItemResolver
from hn_reader.core.tree.expander import TreeExpander
from tests.unit.fakes import FakeItemStore


@pytest.fixture
def store() -> FakeItemStore:
    return FakeItemStore()


@pytest.fixture
def story_store() -> FakeItemStore:
    """A story (1) whose comments are 10 -> 100, and a dead comment 11."""
    fake = FakeItemStore()
    fake.add_item(1, title="A story", url="https://example.com", score=42, child_ids=[10, 11])
    fake.add_item(10, text="top comment", child_ids=[100])
    fake.add_item(11, text="dead comment", dead=True, child_ids=[110])
    fake.add_item(100, text="reply")
    fake.add_item(110, text="reply to dead")
    return fake


@pytest.fixture
def expander(store: FakeItemStore) -> Iterator[TreeExpander]:
    tree_expander = TreeExpander(ItemResolver(store), max_workers=8, poll_interval=0.01)
    yield tree_expander
    tree_expander.close()
