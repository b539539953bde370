"""Convert a ParsedDoc into a PostMetadata record"""

import logging
from typing import Any, Callable

from blogindex.config import Settings
from blogindex.core.extract import fields
from blogindex.core.models import ParsedDoc, PostMetadata


logger = logging.getLogger(__name__)


def _guarded(name: str, fn: Callable[[], Any], defaults: dict[str, Any], slug: str) -> Any:
    """Run one field extractor, substituting the field default on any error."""
    try:
        return fn()
    except Exception as e:
        logger.warning("Extracting %s from %s failed, using default: %s", name, slug, e)
        return defaults[name]


def build_metadata(doc: ParsedDoc, settings: Settings = None) -> PostMetadata:
    """Build one complete PostMetadata record; never partial."""
    settings = settings or Settings()
    slug = doc.slug
    defaults = fields.default_values(settings)

    def field(name: str, fn: Callable[[], Any]) -> Any:
        return _guarded(name, fn, defaults, slug)

    word_count = field("word_count", lambda: fields.count_words(doc))
    minutes = fields.read_minutes(word_count, settings.words_per_minute)

    return PostMetadata(
        id=f"post-{slug}",
        title=field("title", lambda: fields.extract_title(doc, slug)),
        excerpt=field("excerpt", lambda: fields.extract_excerpt(doc, slug, settings.excerpt_length)),
        date=field("date", lambda: fields.extract_date(doc, slug)),
        category=field("category", lambda: fields.extract_category(doc, slug, settings.default_category)),
        tags=field("tags", lambda: fields.extract_tags(doc, slug, settings.default_tags)),
        author=field("author", lambda: fields.extract_author(doc, slug, settings.author)),
        read_time=fields.format_read_time(minutes),
        slug=slug,
        word_count=word_count,
        last_modified=doc.modified.isoformat() if doc.modified else None,
    )
