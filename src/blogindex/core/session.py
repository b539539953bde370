"""Session-scoped presentation state: search, pagination, sidebar, and stats"""

import logging
import re
from datetime import date
from typing import Optional

from blogindex.config import Settings
from blogindex.core.index import count_categories, count_tags, sort_posts, top_tags
from blogindex.core.loader import LoadSource, load_post, load_posts
from blogindex.core.models import PostMetadata, TagCount
from blogindex.core.storage import DocumentStore


logger = logging.getLogger(__name__)

_TRAILING_COUNT_RE = re.compile(r'\d+$')


def filter_term(label: str) -> str:
    """Sidebar label to search term: 'Python 3' -> 'Python'."""
    return _TRAILING_COUNT_RE.sub('', label.strip()).strip()


def matches(post: PostMetadata, term: str) -> bool:
    """Case-insensitive substring match on title, excerpt, category, or any tag."""
    term = term.lower()
    return (
        term in post.title.lower()
        or term in post.excerpt.lower()
        or term in post.category.lower()
        or any(term in tag.lower() for tag in post.tags)
    )


class BlogSession:
    """Posts loaded once per session plus the current search and page."""

    def __init__(self, store: DocumentStore, settings: Settings, posts: list[PostMetadata], source: LoadSource):
        self.store = store
        self.settings = settings
        self.posts = posts
        self.source = source
        self.page = 0
        self.term = ""
        self._filtered: Optional[list[PostMetadata]] = None

    @classmethod
    def open(cls, store: DocumentStore, settings: Settings = None) -> "BlogSession":
        settings = settings or Settings()
        result = load_posts(store, settings)
        return cls(store, settings, result.posts, result.source)

    def refresh(self) -> None:
        """Reload posts through the fallback loader and reset view state."""
        result = load_posts(self.store, self.settings)
        self.posts, self.source = result.posts, result.source
        self.search("")

    # --- search & pagination ---

    def search(self, term: str) -> list[PostMetadata]:
        """Filter posts by term; an empty term clears the filter and returns to page 0."""
        self.term = term.strip()
        self.page = 0
        if not self.term:
            self._filtered = None
            return self.displayed()
        self._filtered = [p for p in self.posts if matches(p, self.term)]
        return self._filtered

    def displayed(self) -> list[PostMetadata]:
        """All matches while filtering, else the first (page + 1) pages of posts."""
        if self._filtered is not None:
            return self._filtered
        return self.posts[:(self.page + 1) * self.settings.posts_per_page]

    def has_more(self) -> bool:
        return self._filtered is None and len(self.displayed()) < len(self.posts)

    def load_more(self) -> list[PostMetadata]:
        if self.has_more():
            self.page += 1
        return self.displayed()

    def is_empty(self) -> bool:
        return not self.displayed()

    # --- sidebar ---

    def recent_posts(self) -> list[PostMetadata]:
        return self.posts[:self.settings.max_recent_posts]

    def category_counts(self) -> list[tuple[str, int]]:
        """(category, count) pairs, most posts first."""
        return count_categories(self.posts).most_common()

    def popular_tags(self) -> list[TagCount]:
        return top_tags(count_tags(self.posts), self.settings.max_tags)

    def stats(self, today: date = None) -> dict[str, int]:
        """Total posts and posts dated in the current month."""
        today = today or date.today()
        prefix = f"{today.year:04d}-{today.month:02d}-"
        return {
            "total": len(self.posts),
            "this_month": sum(1 for p in self.posts if p.date.startswith(prefix)),
        }

    def add_post(self, slug: str) -> Optional[PostMetadata]:
        """Load one post into the session, replacing any post with the same slug."""
        post = load_post(self.store, slug, self.settings)
        if post is None:
            return None
        others = [p for p in self.posts if p.slug != slug]
        self.posts = sort_posts([post] + others)
        self.search("")
        logger.info("Added new post: %s", post.title)
        return post
