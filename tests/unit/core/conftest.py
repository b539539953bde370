"""Shared fixtures for core unit tests"""

import pytest

from blogindex.config import Settings
from blogindex.core.models import PostMetadata
from blogindex.core.parse import parse_html


FULL_HTML = """\
<!DOCTYPE html>
<html>
<head>
  <title>Page Title | Blog</title>
  <meta name="description" content="A short description.">
  <meta name="date" content="2025-09-23T08:30:00Z">
  <meta name="category" content="Computer Basics">
  <meta name="keywords" content="A, B ,C">
  <meta name="author" content="Jane Writer">
</head>
<body>
  <h1>What Exactly is a Computer?</h1>
  <p>Computers are everywhere.</p>
  <p>Second paragraph here.</p>
</body>
</html>
"""

BARE_HTML = """\
<html><body>
<div>just some words without any metadata</div>
</body></html>
"""

CLASS_HTML = """\
<html><body>
<div class="post-title">Class Based Title</div>
<span class="post-category"><i class="fas fa-folder"></i> Programming</span>
<a class="tag">Python</a>
<a class="post-tag"> Testing </a>
<a class="tag"></a>
<p>First paragraph.</p>
</body></html>
"""


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    """Factory: parse an HTML string into a ParsedDoc with the given slug."""
    def _make(html: str, slug: str = "test-post"):
        return parse_html(html, slug)
    return _make


@pytest.fixture(name="make_post")
def make_post_fixture():
    """Factory: a PostMetadata record with overridable fields."""
    def _make(slug: str = "post", **overrides):
        data = {
            "id": f"post-{slug}",
            "title": slug.replace("-", " ").title(),
            "excerpt": "An excerpt.",
            "date": "2025-09-20",
            "category": "General",
            "tags": ["Blog"],
            "author": "SilentCoderHub",
            "read_time": "1 min read",
            "slug": slug,
            "word_count": 100,
        }
        data.update(overrides)
        return PostMetadata(**data)
    return _make


@pytest.fixture(name="full_doc")
def full_doc_fixture(make_doc):
    """Document carrying every meta tag."""
    return make_doc(FULL_HTML, "what-exactly-is-a-computer")


@pytest.fixture(name="bare_doc")
def bare_doc_fixture(make_doc):
    """Document with no extractable metadata."""
    return make_doc(BARE_HTML, "bare-post")


@pytest.fixture(name="class_doc")
def class_doc_fixture(make_doc):
    """Document relying on class-based fallbacks only."""
    return make_doc(CLASS_HTML, "class-post")
