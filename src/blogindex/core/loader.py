"""Runtime post loading: prebuilt index, then known posts, then sample posts"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from blogindex.config import Settings
from blogindex.core.extract.extract import build_metadata
from blogindex.core.index import read_index, sort_posts
from blogindex.core.models import PostMetadata
from blogindex.core.parse import parse_html
from blogindex.core.storage import DocumentStore, StorageError


logger = logging.getLogger(__name__)


class LoadSource(str, Enum):
    indexed    = "indexed"
    discovered = "discovered"
    sample     = "sample"


@dataclass(frozen=True)
class LoadResult:
    posts:  list[PostMetadata]
    source: LoadSource


SAMPLE_POSTS: tuple[dict, ...] = (
    {
        "id": "post-what-exactly-is-a-computer",
        "title": "What Exactly is a Computer? Understanding the Essentials",
        "excerpt": (
            "Ever wondered what defines a computer? Let's dive into its core functions, key features, "
            "and its remarkable place in both work and life. From simple devices to powerful companions."
        ),
        "date": "2025-09-23",
        "category": "Computer Basics",
        "tags": ["Computer Science", "Technology", "Hardware", "Basics"],
        "author": "SilentCoderHub",
        "readTime": "6 min read",
        "slug": "what-exactly-is-a-computer",
    },
    {
        "id": "post-sample-2",
        "title": "Getting Started with Web Development",
        "excerpt": (
            "A comprehensive guide to beginning your journey in web development. "
            "Learn about HTML, CSS, JavaScript, and modern frameworks."
        ),
        "date": "2025-09-20",
        "category": "Web Development",
        "tags": ["HTML", "CSS", "JavaScript", "Frontend"],
        "author": "SilentCoderHub",
        "readTime": "8 min read",
        "slug": "getting-started-web-development",
    },
    {
        "id": "post-sample-3",
        "title": "Understanding JavaScript Closures",
        "excerpt": (
            "Dive deep into one of JavaScript's most powerful features. "
            "Learn how closures work and how to use them effectively in your code."
        ),
        "date": "2025-09-18",
        "category": "Programming",
        "tags": ["JavaScript", "Programming Concepts", "Functions"],
        "author": "SilentCoderHub",
        "readTime": "10 min read",
        "slug": "understanding-javascript-closures",
    },
)


def sample_posts() -> list[PostMetadata]:
    return [PostMetadata.model_validate(p) for p in SAMPLE_POSTS]


def fetch_index_posts(store: DocumentStore) -> list[PostMetadata]:
    """Posts from the prebuilt index, or [] if it is missing or unreadable."""
    try:
        return list(read_index(store.read_index()).posts)
    except StorageError as e:
        logger.info("No posts index available (%s), trying known posts", e)
    except ValueError as e:
        logger.warning("Posts index is corrupt, ignoring it: %s", e)
    return []


def load_post(store: DocumentStore, slug: str, settings: Settings) -> Optional[PostMetadata]:
    """Fetch and extract a single post; None if it cannot be loaded."""
    try:
        html = store.read(slug)
        doc = parse_html(html, slug, modified=store.modified(slug))
        return build_metadata(doc, settings)
    except Exception as e:
        logger.warning("Could not load post %s: %s", slug, e)
        return None


def discover_posts(store: DocumentStore, known_posts: Iterable[str], settings: Settings) -> list[PostMetadata]:
    """Extract each configured known post, skipping ones that fail, newest first."""
    posts = [p for p in (load_post(store, slug, settings) for slug in known_posts) if p]
    return sort_posts(posts)


def load_posts(store: DocumentStore, settings: Settings = None) -> LoadResult:
    """Try index, known posts, then samples; the first non-empty result wins."""
    settings = settings or Settings()
    try:
        posts = fetch_index_posts(store)
        if posts:
            logger.info("Loaded %d posts from index", len(posts))
            return LoadResult(posts, LoadSource.indexed)

        posts = discover_posts(store, settings.known_posts, settings)
        if posts:
            logger.info("Loaded %d known posts", len(posts))
            return LoadResult(posts, LoadSource.discovered)
    except Exception as e:
        logger.error("Error loading posts: %s", e)

    logger.info("Using sample posts as fallback")
    return LoadResult(sample_posts(), LoadSource.sample)
