"""Tests for the hn-reader CLI."""

import json
from collections.abc import Iterator
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from hn_reader.cli import app
from hn_reader.errors import NetworkError
from tests.unit.fakes import FakeItemStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def _keep_logging_config() -> Iterator[None]:
    """Keep log output out of the captured CLI output."""
    with patch("hn_reader.cli.configure_logging"):
        yield


@pytest.fixture
def fake_api(story_store: FakeItemStore) -> Iterator[FakeItemStore]:
    story_store.add_item(2, title="Another story", score=7)
    story_store.add_feed("topstories", [1, 2])
    story_store.add_feed("askstories", [2])
    with patch("hn_reader.cli.HackerNewsApi", return_value=story_store):
        yield story_store


def test_feed_command_prints_stories(fake_api: FakeItemStore) -> None:
    result = runner.invoke(app, ["feed"])

    assert result.exit_code == 0
    assert "A story" in result.stdout
    assert "Another story" in result.stdout
    assert "42 points | 2 comments" in result.stdout


def test_feed_command_json_output(fake_api: FakeItemStore) -> None:
    result = runner.invoke(app, ["feed", "askstories", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [entry["id"] for entry in data] == [2]
    assert data[0]["title"] == "Another story"


def test_feed_command_loads_extra_pages(fake_api: FakeItemStore) -> None:
    fake_api.add_feed("newstories", list(range(1000, 1025)))
    for item_id in range(1000, 1025):
        fake_api.add_item(item_id, title=f"New {item_id}")

    result = runner.invoke(app, ["feed", "newstories", "--pages", "2", "--json"])

    assert result.exit_code == 0
    assert len(json.loads(result.stdout)) == 25


def test_feed_command_fails_when_id_list_unavailable(fake_api: FakeItemStore) -> None:
    fake_api.feed_failures["topstories"] = NetworkError("offline")

    result = runner.invoke(app, ["feed", "topstories"])

    assert result.exit_code == 1


def test_comments_command_renders_tree(fake_api: FakeItemStore) -> None:
    result = runner.invoke(app, ["comments", "1"])

    assert result.exit_code == 0
    out = result.stdout
    assert "A story" in out
    assert "https://example.com" in out
    assert out.index("top comment") < out.index("reply")
    assert "dead comment" not in out


def test_comments_command_max_depth(fake_api: FakeItemStore) -> None:
    result = runner.invoke(app, ["comments", "1", "--max-depth", "0"])

    assert result.exit_code == 0
    assert "... (1 more reply, id=10)" in result.stdout


def test_comments_command_json_output(fake_api: FakeItemStore) -> None:
    result = runner.invoke(app, ["comments", "1", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["story"]["id"] == 1
    assert [c["item"]["id"] for c in data["comments"]] == [10]
    assert [c["item"]["id"] for c in data["comments"][0]["children"]] == [100]


def test_comments_command_without_comments(fake_api: FakeItemStore) -> None:
    result = runner.invoke(app, ["comments", "2"])

    assert result.exit_code == 0
    assert "No comments." in result.stdout


def test_comments_command_fails_for_missing_story(fake_api: FakeItemStore) -> None:
    result = runner.invoke(app, ["comments", "404"])

    assert result.exit_code == 1
