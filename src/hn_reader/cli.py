"""CLI for hn-reader (browse feeds and comment threads)."""

import json
from dataclasses import asdict
from typing import Annotated, Any

import typer
from loguru import logger

from hn_reader.api import HackerNewsApi
from hn_reader.core.feed.controller import FeedState
from hn_reader.core.tree.render import render_comment_forest, render_story
from hn_reader.errors import FetchError
from hn_reader.logging_config import configure_logging
from hn_reader.models.item import CommentNode, FeedType, Item
from hn_reader.reader import HackerNewsReader

app = typer.Typer(help="hn-reader: browse Hacker News feeds and comment threads.")


class _EchoListener:
    """Prints stories the moment they are appended to the feed."""

    def __init__(self, *, quiet: bool = False) -> None:
        self.quiet = quiet

    def on_feed_reset(self, feed_type: str) -> None:
        logger.debug("Loading feed {}", feed_type)

    def on_item_appended(self, item: Item, position: int) -> None:
        if not self.quiet:
            typer.echo(f"{position + 1:>3}. {render_story(item)}", nl=False)

    def on_feed_error(self, feed_type: str, error: FetchError) -> None:
        logger.error("Cannot load feed {}: {}", feed_type, error)


def _node_to_dict(node: CommentNode) -> dict[str, Any]:
    return {
        "item": asdict(node.item),
        "children": [_node_to_dict(child) for child in node.ordered_children()],
    }


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


@app.command()
def feed(
    feed_type: Annotated[FeedType, typer.Argument(help="Feed to load")] = FeedType.TOP,
    pages: int = typer.Option(1, "--pages", "-p", min=1, help="Number of pages to load"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List the stories of a feed, printed in the order they arrive."""
    listener = _EchoListener(quiet=output_json)
    with HackerNewsReader(HackerNewsApi(), listener=listener) as reader:
        reader.on_feed_type_changed(feed_type)
        if reader.feed.state is FeedState.ERROR:
            raise typer.Exit(1)

        for _ in range(pages - 1):
            if reader.feed.exhausted:
                break
            reader.on_near_end_of_list()

        if output_json:
            typer.echo(json.dumps([asdict(item) for item in reader.feed.items], indent=2))


@app.command()
def comments(
    story_id: int = typer.Argument(..., help="Story id"),
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", min=0, help="Deepest reply level to print"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show a story and its full comment tree."""
    with HackerNewsReader(HackerNewsApi()) as reader:
        try:
            story = reader.open_story(story_id)
        except FetchError as e:
            logger.error("Cannot open story {}: {}", story_id, e)
            raise typer.Exit(1) from e

        expansion = reader.comments.expand(story.child_ids, root_id=story.id)
        for arrival in expansion:
            logger.debug("Comment {} arrived at depth {}", arrival.node.item.id, arrival.depth)

        position = {item_id: i for i, item_id in enumerate(story.child_ids)}
        roots = sorted(expansion.roots, key=lambda n: position.get(n.item.id, len(position)))

        if output_json:
            data = {"story": asdict(story), "comments": [_node_to_dict(n) for n in roots]}
            typer.echo(json.dumps(data, indent=2))
            return

        typer.echo(render_story(story, with_body=True))
        if not roots:
            typer.echo("No comments.")
            return
        typer.echo(
            render_comment_forest(roots, parent_ids=story.child_ids, max_depth=max_depth),
            nl=False,
        )
