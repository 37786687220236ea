"""Tests for parsing raw API payloads."""

import pytest

from hn_reader.core.parsing import parse_id_list, parse_item
from hn_reader.errors import NotFound, ParseError

STORY = {
    "by": "dhouston",
    "descendants": 71,
    "id": 8863,
    "kids": [8952, 9224, 8917],
    "score": 111,
    "time": 1175714200,
    "title": "My YC app: Dropbox - Throw away your USB drive",
    "type": "story",
    "url": "http://www.getdropbox.com/u/2/screencast.html",
}


def test_parse_item_maps_api_fields() -> None:
    item = parse_item(STORY, item_id=8863)

    assert item.id == 8863
    assert item.author == "dhouston"
    assert item.created_at == 1175714200
    assert item.score == 111
    assert item.child_ids == (8952, 9224, 8917)
    assert item.kind == "story"
    assert item.descendants == 71
    assert item.deleted is False
    assert item.dead is False


def test_parse_item_defaults_missing_optional_fields() -> None:
    item = parse_item({"id": 5, "deleted": True})

    assert item.title is None
    assert item.author is None
    assert item.child_ids == ()
    assert item.score == 0
    assert item.deleted is True


def test_parse_item_null_is_not_found() -> None:
    with pytest.raises(NotFound) as exc_info:
        parse_item(None, item_id=42)
    assert exc_info.value.item_id == 42


@pytest.mark.parametrize("payload", [[1, 2], "text", {"title": "no id"}, {"id": "8863"}])
def test_parse_item_rejects_malformed_payloads(payload: object) -> None:
    with pytest.raises(ParseError):
        parse_item(payload, item_id=8863)


def test_parse_item_rejects_malformed_kids() -> None:
    with pytest.raises(ParseError, match="malformed kids"):
        parse_item({"id": 1, "kids": ["a"]})


def test_parse_id_list_returns_ids_in_order() -> None:
    assert parse_id_list([3, 1, 2], feed_type="topstories") == [3, 1, 2]


def test_parse_id_list_rejects_non_arrays() -> None:
    with pytest.raises(ParseError, match="Expected a JSON array"):
        parse_id_list({"ids": []}, feed_type="topstories")
    with pytest.raises(ParseError, match="non-integer"):
        parse_id_list([1, "2"], feed_type="topstories")


def test_parse_item_rejects_boolean_kids() -> None:
    with pytest.raises(ParseError, match="malformed kids"):
        parse_item({"id": 1, "kids": [2, True]})
