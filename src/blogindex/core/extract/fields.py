"""Per-field metadata extractors built from ordered strategy lists.

Each strategy takes a ParsedDoc and its fallback slug and returns a value or
None. ``first_match`` tries the strategies of a field in order; empty strings
and empty lists count as a miss, so every field ends at its literal default.
"""

import math
import re
from datetime import date
from typing import Any, Callable, Optional, Sequence

from bs4 import NavigableString

from blogindex.config import Settings
from blogindex.core.models import ParsedDoc


Strategy = Callable[[ParsedDoc, str], Any]

DEFAULT_TITLE = "Untitled Post"
DEFAULT_EXCERPT = "No excerpt available."
TRUNCATION_MARKER = "..."

DATE_RE = re.compile(r'(\d{4}-\d{2}-\d{2})')
HIDDEN_TAGS = {'script', 'style', 'noscript', 'template'}


def first_match(strategies: Sequence[Strategy], doc: ParsedDoc, slug: str, default: Any) -> Any:
    """Return the first non-empty strategy result, else default."""
    for strategy in strategies:
        value = strategy(doc, slug)
        if value:
            return value
    return default


# --- lookups ---

def meta_content(doc: ParsedDoc, key: str, attr: str = 'name') -> Optional[str]:
    """Stripped content of <meta {attr}="{key}">, None if missing or blank."""
    el = doc.soup.select_one(f'meta[{attr}="{key}"]')
    if el is None:
        return None
    content = (el.get('content') or '').strip()
    return content or None


def _text_of(doc: ParsedDoc, selector: str) -> Optional[str]:
    el = doc.soup.select_one(selector)
    return el.get_text().strip() if el else None


def _meta(key: str, attr: str = 'name') -> Strategy:
    return lambda doc, slug: meta_content(doc, key, attr)


def _selector(selector: str) -> Strategy:
    return lambda doc, slug: _text_of(doc, selector)


# --- title ---

TITLE_STRATEGIES: list[Strategy] = [
    _selector('h1'),
    _selector('title'),
    _selector('.post-title'),
    _selector('.title'),
]


def extract_title(doc: ParsedDoc, slug: str) -> str:
    return first_match(TITLE_STRATEGIES, doc, slug, DEFAULT_TITLE)


# --- excerpt ---

def truncate(text: str, limit: int) -> str:
    """Cap text at limit characters, appending '...' when it was longer."""
    return text[:limit] + TRUNCATION_MARKER if len(text) > limit else text


def excerpt_strategies(limit: int) -> list[Strategy]:
    def first_paragraph(doc: ParsedDoc, slug: str) -> Optional[str]:
        text = _text_of(doc, 'p')
        return truncate(text, limit) if text else None

    return [_meta('description'), first_paragraph]


def extract_excerpt(doc: ParsedDoc, slug: str, limit: int = 200) -> str:
    return first_match(excerpt_strategies(limit), doc, slug, DEFAULT_EXCERPT)


# --- date ---

def _meta_date(key: str, attr: str) -> Strategy:
    def strategy(doc: ParsedDoc, slug: str) -> Optional[str]:
        value = meta_content(doc, key, attr)
        return value.split('T')[0].strip() if value else None
    return strategy


def _slug_date(doc: ParsedDoc, slug: str) -> Optional[str]:
    m = DATE_RE.search(slug or '')
    return m.group(1) if m else None


DATE_STRATEGIES: list[Strategy] = [
    _meta_date('date', 'name'),
    _meta_date('article:published_time', 'property'),
    _slug_date,
]


def today() -> str:
    return date.today().isoformat()


def extract_date(doc: ParsedDoc, slug: str) -> str:
    return first_match(DATE_STRATEGIES, doc, slug, today())


# --- category ---

def strip_label(text: str) -> str:
    """Keep only the text after the last whitespace run ('<icon> Tech' -> 'Tech').

    Multi-word categories keep only their last word.
    """
    return re.split(r'\s+', text.strip())[-1]


def _category_element(doc: ParsedDoc, slug: str) -> Optional[str]:
    el = doc.soup.select_one('.category, .post-category')
    if el is None:
        return None
    text = el.get_text().strip()
    return strip_label(text) if text else None


CATEGORY_STRATEGIES: list[Strategy] = [
    _meta('category'),
    _category_element,
]


def extract_category(doc: ParsedDoc, slug: str, default: str = "General") -> str:
    return first_match(CATEGORY_STRATEGIES, doc, slug, default)


# --- tags ---

def split_keywords(value: str) -> list[str]:
    """Split a comma-separated keyword list, trimming and dropping empties."""
    return [t.strip() for t in value.split(',') if t.strip()]


def _keyword_tags(doc: ParsedDoc, slug: str) -> Optional[list[str]]:
    value = meta_content(doc, 'keywords')
    return split_keywords(value) if value else None


def _tag_elements(doc: ParsedDoc, slug: str) -> list[str]:
    return [t for t in (el.get_text().strip() for el in doc.soup.select('.tag, .post-tag')) if t]


TAG_STRATEGIES: list[Strategy] = [
    _keyword_tags,
    _tag_elements,
]


def extract_tags(doc: ParsedDoc, slug: str, default: Sequence[str] = ("Blog",)) -> list[str]:
    return list(first_match(TAG_STRATEGIES, doc, slug, default))


# --- author ---

AUTHOR_STRATEGIES: list[Strategy] = [_meta('author')]


def extract_author(doc: ParsedDoc, slug: str, default: str = "SilentCoderHub") -> str:
    return first_match(AUTHOR_STRATEGIES, doc, slug, default)


# --- word count / read time ---

def visible_text(doc: ParsedDoc) -> str:
    """Concatenated text of <body> (or the whole tree), skipping comments and script/style content."""
    root = doc.soup.body or doc.soup
    return ''.join(
        s for s in root.find_all(string=True)
        if type(s) is NavigableString and not any(p.name in HIDDEN_TAGS for p in s.parents)
    )


def count_words(doc: ParsedDoc) -> int:
    return len(visible_text(doc).split())


def read_minutes(word_count: int, words_per_minute: int = 200) -> int:
    return max(1, math.ceil(word_count / words_per_minute))


def format_read_time(minutes: int) -> str:
    return f"{minutes} min read"


def extract_read_time(doc: ParsedDoc, slug: str, words_per_minute: int = 200) -> str:
    return format_read_time(read_minutes(count_words(doc), words_per_minute))


def default_values(settings: Settings) -> dict[str, Any]:
    """Literal default for every extracted field."""
    return {
        "title": DEFAULT_TITLE,
        "excerpt": DEFAULT_EXCERPT,
        "date": today(),
        "category": settings.default_category,
        "tags": list(settings.default_tags),
        "author": settings.author,
        "read_time": format_read_time(1),
        "word_count": 0,
    }
