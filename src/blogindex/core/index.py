"""Collection indexing: per-post records, category/tag aggregation, and corpus stats"""

import logging
import math
from collections import Counter
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Iterable

from blogindex.config import Settings
from blogindex.core.extract.extract import build_metadata
from blogindex.core.models import (
    CategoryCount,
    IndexStats,
    ParsedDoc,
    PostMetadata,
    PostsIndex,
    TagCount,
)
from blogindex.core.utils.fs import atomic_write_text


logger = logging.getLogger(__name__)


def collect_posts(docs: Iterable[ParsedDoc], settings: Settings) -> list[PostMetadata]:
    """Build one record per document, logging and skipping documents that fail."""
    posts = []
    for doc in docs:
        try:
            posts.append(build_metadata(doc, settings))
        except Exception as e:
            logger.error("Skipping %s: %s", doc.slug, e)
    return posts


def _date_key(post: PostMetadata) -> date:
    try:
        return date.fromisoformat(post.date)
    except ValueError:
        return date.min


def sort_posts(posts: Iterable[PostMetadata]) -> list[PostMetadata]:
    """Newest first; equal dates keep encounter order, unparseable dates go last."""
    return sorted(posts, key=_date_key, reverse=True)


def count_categories(posts: Iterable[PostMetadata]) -> Counter:
    return Counter(p.category for p in posts)


def count_tags(posts: Iterable[PostMetadata]) -> Counter:
    """Posts per tag; a tag repeated within one post counts once."""
    return Counter(t for p in posts for t in dict.fromkeys(p.tags))


def top_tags(counts: Counter, limit: int) -> list[TagCount]:
    """Highest counts first, ties in first-encountered order."""
    return [TagCount(name=name, count=n) for name, n in counts.most_common(limit)]


def category_list(counts: Counter) -> list[CategoryCount]:
    return [
        CategoryCount(name=name, count=counts[name], description=f"Posts about {name}")
        for name in sorted(counts)
    ]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_stats(posts: list[PostMetadata]) -> IndexStats:
    """Totals over already-sorted posts; average and dates omitted when empty."""
    if not posts:
        return IndexStats(total_words=0)
    return IndexStats(
        total_words=sum(p.word_count or 0 for p in posts),
        average_read_time=_round_half_up(sum(p.read_minutes for p in posts) / len(posts)),
        latest_post=posts[0].date,
        oldest_post=posts[-1].date,
    )


def build_index(posts: Iterable[PostMetadata], settings: Settings, generated: datetime = None) -> PostsIndex:
    """Aggregate records into a PostsIndex sorted newest first."""
    ordered = sort_posts(posts)
    generated = generated or datetime.now(timezone.utc)
    return PostsIndex(
        generated=generated.isoformat(),
        total_posts=len(ordered),
        posts=ordered,
        categories=category_list(count_categories(ordered)),
        tags=top_tags(count_tags(ordered), settings.max_tags),
        stats=compute_stats(ordered),
    )


def write_index(index: PostsIndex, path: Path) -> Path:
    """Atomically replace path with the JSON-serialised index."""
    return atomic_write_text(path, index.to_json() + "\n")


def read_index(text: str) -> PostsIndex:
    """Validate index JSON; raises pydantic.ValidationError on bad input."""
    return PostsIndex.model_validate_json(text)
