"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from blogindex.config import Settings, load_config
from blogindex.core.models import PostsIndex
from blogindex.core.pipeline import run_index, run_watch
from blogindex.core.session import BlogSession
from blogindex.core.storage import open_store
from blogindex.core.utils.logs import setup_logger


PostsDirOpt = Annotated[Optional[str], typer.Option("--posts-dir", help="Directory of HTML posts")]
OutputOpt = Annotated[Optional[str], typer.Option("--output", help="Index file path (default: <posts-dir>/<index-file>)")]
WatchOpt = Annotated[bool, typer.Option("--watch", "-w", help="Keep watching and re-index on changes")]
LogLevelOpt = Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logger("blogindex", settings.log_level)
    return settings


def _echo_index(index: PostsIndex, path: Path) -> None:
    """Print a post list and statistics summary for a written index."""
    for post in index.posts:
        typer.echo(f"  {post.date}  {post.slug}: {post.title}")
    typer.echo(f"Indexed {index.total_posts} post(s) to {path}")
    typer.echo(f"  Categories: {len(index.categories)}")
    typer.echo(f"  Tags: {len(index.tags)}")
    typer.echo(f"  Total words: {index.stats.total_words:,}")
    if index.stats.average_read_time is not None:
        typer.echo(f"  Average read time: {index.stats.average_read_time} minutes")


def index_cmd(
    posts_dir: PostsDirOpt = None,
    output: OutputOpt = None,
    watch: WatchOpt = False,
    log_level: LogLevelOpt = None,
    ):
    """Scan the posts directory and write the posts index. Use --watch to keep re-indexing."""
    settings = _settings(overrides={"posts_dir": posts_dir, "log_level": log_level})
    posts = Path(settings.posts_dir)
    out = Path(output) if output else None

    if watch:
        typer.echo(f"Watching {posts}/ for changes (Ctrl+C to stop)")
        try:
            run_watch(posts, settings, out, on_index=_echo_index)
        except RuntimeError as e:
            _fail(str(e))
        except KeyboardInterrupt:
            typer.echo("Stopped watching.")
        return

    try:
        index, path = run_index(posts, settings, out)
    except RuntimeError as e:
        _fail(str(e))
    except OSError as e:
        _fail("Writing index failed", e)
    if not index.posts:
        typer.echo(f"No HTML files found in {posts}/")
    _echo_index(index, path)


def main_cmd(
    ctx: typer.Context,
    posts_dir: PostsDirOpt = None,
    output: OutputOpt = None,
    watch: WatchOpt = False,
    log_level: LogLevelOpt = None,
    ):
    """Blog posts indexer. Without a command, runs one indexing pass."""
    if ctx.invoked_subcommand is None:
        index_cmd(posts_dir=posts_dir, output=output, watch=watch, log_level=log_level)


def list_cmd(
    source: Annotated[Optional[str], typer.Option("--source", help="Posts directory or base URL")] = None,
    search: Annotated[str, typer.Option("--search", "-s", help="Filter by title, excerpt, category, or tag")] = "",
    page: Annotated[int, typer.Option("--page", min=1, help="Number of pages to show")] = 1,
    log_level: LogLevelOpt = None,
    ):
    """Load posts (index, known posts, or samples) and print them with the sidebar summary."""
    settings = _settings(overrides={"log_level": log_level})
    session = BlogSession.open(open_store(source or settings.posts_dir, settings), settings)
    typer.echo(f"Source: {session.source.value}")

    session.search(search)
    for _ in range(page - 1):
        session.load_more()

    if session.is_empty():
        typer.echo("No posts found.")
        raise typer.Exit(1)

    for post in session.displayed():
        typer.echo(f"  {post.date}  {post.title} [{post.category}] ({post.read_time})")
    if session.has_more():
        typer.echo(f"  ... {len(session.posts) - len(session.displayed())} more")

    stats = session.stats()
    typer.echo(f"Posts: {stats['total']} total, {stats['this_month']} this month")
    typer.echo("Recent: " + ", ".join(p.title for p in session.recent_posts()))
    typer.echo("Categories: " + ", ".join(f"{name} ({n})" for name, n in session.category_counts()))
    typer.echo("Tags: " + ", ".join(t.name for t in session.popular_tags()))
