"""Tests for HackerNewsReader: the presentation-facing facade."""

from collections.abc import Iterator

import pytest

from hn_reader.errors import NotFound
from hn_reader.reader import HackerNewsReader
from tests.unit.fakes import FakeItemStore, RecordingListener


@pytest.fixture
def reader(story_store: FakeItemStore) -> Iterator[HackerNewsReader]:
    story_store.add_feed("topstories", [1])
    with HackerNewsReader(story_store, max_workers=4, poll_interval=0.01) as hn_reader:
        yield hn_reader


def test_selected_story_from_feed_is_not_fetched_again(
    reader: HackerNewsReader, story_store: FakeItemStore
) -> None:
    reader.on_feed_type_changed("topstories")

    expansion = reader.on_story_selected(1)
    ids = [a.node.item.id for a in expansion]

    assert ids == [10, 100]
    assert story_store.item_calls.count(1) == 1
    assert reader.story is not None
    assert reader.story.title == "A story"


def test_selected_story_outside_feed_is_fetched(
    reader: HackerNewsReader, story_store: FakeItemStore
) -> None:
    expansion = reader.on_story_selected(1)

    assert [n.item.id for n in expansion.roots] == []
    list(expansion)
    assert [n.item.id for n in expansion.roots] == [10]
    assert story_store.item_calls[0] == 1


def test_selecting_missing_story_raises(reader: HackerNewsReader) -> None:
    with pytest.raises(NotFound):
        reader.on_story_selected(404)


def test_navigating_back_abandons_comments(reader: HackerNewsReader) -> None:
    expansion = reader.on_story_selected(1)
    reader.on_navigate_back()

    assert expansion.stale is True
    assert list(expansion) == []
    assert reader.story is None


def test_feed_switch_abandons_open_story(reader: HackerNewsReader) -> None:
    expansion = reader.on_story_selected(1)

    reader.on_feed_type_changed("topstories")

    assert expansion.stale is True


def test_listener_receives_feed_events(story_store: FakeItemStore) -> None:
    story_store.add_feed("topstories", [1])
    listener = RecordingListener()

    with HackerNewsReader(story_store, listener=listener, poll_interval=0.01) as hn_reader:
        hn_reader.on_feed_type_changed("topstories")
        hn_reader.on_near_end_of_list()
        hn_reader.refresh()

    assert listener.events == [
        ("reset", "topstories"),
        ("append", (1, 0)),
        ("reset", "topstories"),
        ("append", (1, 0)),
    ]


def test_open_story_sets_current_story_without_fetching_comments(
    reader: HackerNewsReader, story_store: FakeItemStore
) -> None:
    story = reader.open_story(1)

    assert reader.story is story
    assert story.child_ids == (10, 11)
    assert story_store.item_calls == [1]
