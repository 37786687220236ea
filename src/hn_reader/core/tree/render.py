"""Render stories and comment forests as plain text."""

import io
import re
from collections.abc import Sequence
from datetime import datetime, timezone
from html import unescape

from hn_reader.models.item import CommentNode, Item

_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_PARAGRAPH_RE = re.compile(r"<p>", re.IGNORECASE)
_LINK_RE = re.compile(
    r"""<a\s+href=["'](?P<url>[^"']+)["'][^>]*>(?P<text>.*?)</a>""",
    re.IGNORECASE | re.DOTALL,
)
_TAG_RE = re.compile(r"<[^>]+>")


def _link_to_text(match: re.Match[str]) -> str:
    url = match["url"]
    label = _TAG_RE.sub("", match["text"])
    if unescape(label) == unescape(url):
        return label
    return f"{label} ({url})"


def html_to_text(html: str | None) -> str:
    """Flatten the small HTML subset the API uses into plain text.

    Paragraphs and line breaks become newlines, links become
    ``label (url)``, every other tag is dropped and entities are decoded.
    """
    if not html:
        return ""
    text = _BREAK_RE.sub("\n", html)
    text = _PARAGRAPH_RE.sub("\n\n", text)
    text = _LINK_RE.sub(_link_to_text, text)
    text = _TAG_RE.sub("", text)
    return unescape(text).strip()


def format_timestamp(unix_seconds: int) -> str:
    return datetime.fromtimestamp(unix_seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def render_story(item: Item, *, with_body: bool = False) -> str:
    """Render a story headline, optionally followed by its link and text."""
    noun = "comment" if item.child_count == 1 else "comments"
    lines = [
        item.title or "(untitled)",
        f"  by {item.author or '[unknown]'} | {format_timestamp(item.created_at)} | "
        f"{item.score} points | {item.child_count} {noun}",
    ]
    if with_body:
        if item.url:
            lines.append(f"  {item.url}")
        body = html_to_text(item.text)
        if body:
            lines.append("")
            lines.extend(f"  {line}" if line else "" for line in body.split("\n"))
    return "\n".join(lines) + "\n"


def render_comment_forest(
    roots: Sequence[CommentNode],
    *,
    parent_ids: Sequence[int] = (),
    max_depth: int | None = None,
) -> str:
    """Render a comment forest as an indented outline.

    Args:
        roots: Top-level comments.
        parent_ids: The owning story's ``child_ids``, giving the order of ``roots``.
        max_depth: Deepest level to print (0 = top-level only, None = unlimited).

    Returns:
        Text with one block per comment, replies indented below their parent.
    """
    position = {item_id: i for i, item_id in enumerate(parent_ids)}
    ordered = sorted(roots, key=lambda n: position.get(n.item.id, len(position)))

    out = io.StringIO()
    todo: list[tuple[CommentNode, int]] = [(node, 0) for node in reversed(ordered)]
    while todo:
        node, depth = todo.pop()
        indent = "    " * depth
        item = node.item
        out.write(f"{indent}- {item.author or '[unknown]'} | {format_timestamp(item.created_at)}\n")
        for line in html_to_text(item.text).split("\n"):
            out.write(f"{indent}  {line}\n" if line else "\n")

        if max_depth is not None and depth == max_depth:
            if node.child_count > 0:
                noun = "reply" if node.child_count == 1 else "replies"
                out.write(f"{indent}    - ... ({node.child_count} more {noun}, id={item.id})\n")
            continue
        todo.extend((child, depth + 1) for child in reversed(node.ordered_children()))

    return out.getvalue()
