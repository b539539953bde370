"""Pipeline step functions: index a posts directory, optionally in watch mode"""

import logging
from pathlib import Path
from typing import Callable, Iterator

from blogindex.config import Settings
from blogindex.core.index import build_index, collect_posts, write_index
from blogindex.core.models import ParsedDoc, PostsIndex
from blogindex.core.parse import discover_files, parse_file
from blogindex.core.watch import watch_posts


logger = logging.getLogger(__name__)


def _parsed_docs(files: list[Path]) -> Iterator[ParsedDoc]:
    """Parse each file, logging and skipping ones that cannot be read."""
    for p in files:
        try:
            yield parse_file(p)
        except Exception as e:
            logger.error("Error processing %s: %s", p.name, e)


def run_index(
    posts_dir: Path,
    settings: Settings,
    output: Path = None,
    ) -> tuple[PostsIndex, Path]:
    """Scan posts_dir, build the index, and write it. Returns (index, output_path)."""
    posts_dir = Path(posts_dir)
    if not posts_dir.is_dir():
        raise RuntimeError(f"Posts directory not found: {posts_dir}")

    output = Path(output) if output else posts_dir / settings.index_file
    files = discover_files(posts_dir)
    logger.info("Found %d post file(s) in %s", len(files), posts_dir)

    posts = collect_posts(_parsed_docs(files), settings)
    for post in posts:
        logger.debug("Processed: %s", post.title)

    index = build_index(posts, settings)
    write_index(index, output)
    logger.info("Index saved to %s (%d posts)", output, index.total_posts)
    return index, output


def run_watch(
    posts_dir: Path,
    settings: Settings,
    output: Path = None,
    on_index: Callable[[PostsIndex, Path], None] = None,
    **watch_kwargs,
    ) -> None:
    """Index once, then re-index on every debounced change until interrupted."""
    def reindex(changes: list[str] = None) -> None:
        index, path = run_index(posts_dir, settings, output)
        if on_index:
            on_index(index, path)

    reindex()
    watch_kwargs.setdefault("interval", settings.watch_interval)
    watch_kwargs.setdefault("debounce", settings.watch_debounce)
    watch_posts(Path(posts_dir), reindex, **watch_kwargs)
