"""Parse raw API payloads into domain models."""

from typing import Any

from hn_reader.errors import NotFound, ParseError
from hn_reader.models.item import Item


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def parse_item(data: Any, *, item_id: int | None = None) -> Item:
    """Parse a decoded ``item/{id}.json`` payload into an Item.

    Args:
        data: Decoded JSON value.
        item_id: The id that was requested, for error reporting.

    Returns:
        The parsed Item.

    Raises:
        NotFound: The payload is JSON ``null``.
        ParseError: The payload is not an object or lacks an integer id.
    """
    if data is None:
        msg = f"Item {item_id!r} does not exist"
        raise NotFound(msg, item_id=item_id)
    if not isinstance(data, dict):
        msg = f"Expected a JSON object for item {item_id!r}, got {type(data).__name__}"
        raise ParseError(msg, item_id=item_id)

    raw_id = data.get("id")
    if not isinstance(raw_id, int) or isinstance(raw_id, bool):
        msg = f"Item {item_id!r} has no valid id: {raw_id!r}"
        raise ParseError(msg, item_id=item_id)

    kids = data.get("kids") or []
    if not isinstance(kids, list) or not all(
        isinstance(k, int) and not isinstance(k, bool) for k in kids
    ):
        msg = f"Item {raw_id} has malformed kids: {kids!r}"
        raise ParseError(msg, item_id=raw_id)

    try:
        return Item(
            id=raw_id,
            title=_optional_str(data, "title"),
            author=_optional_str(data, "by"),
            created_at=int(data.get("time") or 0),
            score=int(data.get("score") or 0),
            url=_optional_str(data, "url"),
            text=_optional_str(data, "text"),
            child_ids=tuple(kids),
            deleted=bool(data.get("deleted", False)),
            dead=bool(data.get("dead", False)),
            kind=_optional_str(data, "type"),
            descendants=_optional_int(data, "descendants"),
            parent_id=_optional_int(data, "parent"),
        )
    except (TypeError, ValueError) as e:
        msg = f"Item {raw_id} has malformed fields: {e}"
        raise ParseError(msg, item_id=raw_id) from e


def parse_id_list(data: Any, *, feed_type: str) -> list[int]:
    """Parse a decoded ``{feed}.json`` payload into a list of ids."""
    if not isinstance(data, list):
        msg = f"Expected a JSON array for {feed_type!r}, got {type(data).__name__}"
        raise ParseError(msg)
    if not all(isinstance(x, int) and not isinstance(x, bool) for x in data):
        msg = f"Feed {feed_type!r} contains non-integer ids"
        raise ParseError(msg)
    return list(data)
