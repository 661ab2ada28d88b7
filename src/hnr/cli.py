"""CLI entry point for hn-terminal-reader."""
from __future__ import annotations

import asyncio
import logging
import textwrap
from datetime import datetime, timezone
from typing import Optional

import typer

from hnr import __version__
from hnr.config import Settings
from hnr.core.client import HNClient, HNClientError
from hnr.core.models import Category, Post

app = typer.Typer(
    name="hnr",
    help="Browse Hacker News front pages and comment threads from the terminal.",
    no_args_is_help=True,
)

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def version_callback(value: bool):
    if value:
        typer.echo(f"hn-terminal-reader {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log fetches at DEBUG level"),
):
    """hn-terminal-reader: cached, paginated Hacker News in your terminal."""
    level = "DEBUG" if verbose else Settings.load().log_level
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _open_client(settings: Settings) -> HNClient:
    """Build the API client for one CLI invocation."""
    return HNClient.from_settings(settings)


def _format_time(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


def _print_post(number: int, post: Post) -> None:
    typer.echo(f"{number} - {post.title}")
    typer.echo(f"    {post.by} - {_format_time(post.time)} - {post.descendants} comments")
    if post.url:
        typer.echo(f"    {post.url}")
    typer.echo()


async def _load_page(settings: Settings, category: Category, skip: int, limit: int):
    from hnr.core.engine import ReaderEngine
    from hnr.core.store import DataStore

    async with _open_client(settings) as client:
        engine = ReaderEngine(DataStore(), client, page_size=settings.page_size)
        return await engine.load_page(category, skip=skip, limit=limit)


async def _load_thread(settings: Settings, post_id: int, max_depth: Optional[int]):
    from hnr.core.engine import ReaderEngine
    from hnr.core.store import DataStore
    from hnr.core.threads import flatten_comments

    async with _open_client(settings) as client:
        store = DataStore()
        engine = ReaderEngine(store, client, page_size=settings.page_size)
        result = await engine.load_thread(post_id, max_depth=max_depth)
        return result, store, list(flatten_comments(store, post_id).with_depth())


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def posts(
    category: Category = typer.Argument(Category.TOP, help="Story list: top, best or new"),
    skip: int = typer.Option(0, "--skip", min=0, help="Posts to skip from the start of the list"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Posts per page"),
):
    """List one page of posts for a category."""
    settings = Settings.load()
    _limit = limit if limit is not None else settings.page_size

    try:
        page = asyncio.run(_load_page(settings, category, skip, _limit))
    except HNClientError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    for i, post in enumerate(page.posts, skip + 1):
        _print_post(i, post)
    if page.degraded:
        typer.echo(f"  ({len(page.dropped)} posts could not be loaded)", err=True)


@app.command()
def thread(
    post_id: int = typer.Argument(..., help="Id of the post to show"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", "-d", min=1, help="Reply levels to load"),
):
    """Show a post and its comment thread."""
    settings = Settings.load()

    try:
        result, store, entries = asyncio.run(_load_thread(settings, post_id, max_depth))
    except HNClientError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    post = result.post
    typer.echo(post.title)
    typer.echo(f"{post.by} - {_format_time(post.time)} - {post.descendants} comments")
    if post.url:
        typer.echo(post.url)
    if post.text:
        typer.echo(textwrap.indent(post.text, "  "))
    typer.echo()

    for entry in entries:
        indent = "  " * entry.depth
        comment = store.get_comment(entry.comment_id)
        if comment is None:
            typer.echo(f"{indent}[{entry.comment_id} not loaded]")
            continue
        typer.echo(f"{indent}{comment.by} - {_format_time(comment.time)}")
        typer.echo(textwrap.indent(comment.text, indent + "  "))

    if result.dropped:
        typer.echo(f"  ({len(result.dropped)} comments could not be loaded)", err=True)
