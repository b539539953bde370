"""Integration tests for the index -> load -> present flow.

Each test runs against the canonical posts directory below and asserts stable
expected values. Read this file top-to-bottom as a reference for what each
stage produces with default settings.

Canonical posts directory
-------------------------
    computer.html                     meta date 2025-09-23T09:00:00Z, category meta,
                                      keywords "Computer Science, Hardware"
    2025-09-20-web-dev.html           no date meta (date from filename),
                                      .post-category "<i></i> Web", .tag x2
    closures.html                     article:published_time 2025-09-18,
                                      description meta, keywords "JavaScript"
    notes.txt                         ignored

Index after run_index (newest first):
    computer          2025-09-23   Computer Basics   [Computer Science, Hardware]
    2025-09-20-web-dev 2025-09-20  Web               [HTML, CSS]
    closures          2025-09-18   General           [JavaScript]
"""

import json

import pytest

from blogindex.config import Settings
from blogindex.core.loader import LoadSource
from blogindex.core.pipeline import run_index
from blogindex.core.session import BlogSession
from blogindex.core.storage import DirectoryStore


COMPUTER_HTML = """\
<!DOCTYPE html>
<html>
<head>
  <title>What Exactly is a Computer?</title>
  <meta name="date" content="2025-09-23T09:00:00Z">
  <meta name="category" content="Computer Basics">
  <meta name="keywords" content="Computer Science, Hardware">
</head>
<body>
  <h1>What Exactly is a Computer?</h1>
  <p>A computer is a machine that processes information.</p>
</body>
</html>
"""

WEB_DEV_HTML = """\
<html>
<body>
  <h1 class="post-title-main">Getting Started with Web Development</h1>
  <span class="post-category"><i class="fas fa-folder"></i> Web</span>
  <div class="post-tags"><a class="tag">HTML</a><a class="tag">CSS</a></div>
  <p>Learn HTML and CSS.</p>
</body>
</html>
"""

CLOSURES_HTML = """\
<html>
<head>
  <meta property="article:published_time" content="2025-09-18T10:00:00+00:00">
  <meta name="description" content="How closures capture scope.">
  <meta name="keywords" content="JavaScript">
  <meta name="author" content="Guest Author">
</head>
<body><h1>Understanding JavaScript Closures</h1><p>Closures are functions.</p></body>
</html>
"""


@pytest.fixture(name="posts_dir")
def posts_dir_fixture(tmp_path):
    d = tmp_path / "posts"
    d.mkdir()
    (d / "computer.html").write_text(COMPUTER_HTML, encoding="utf-8")
    (d / "2025-09-20-web-dev.html").write_text(WEB_DEV_HTML, encoding="utf-8")
    (d / "closures.html").write_text(CLOSURES_HTML, encoding="utf-8")
    (d / "notes.txt").write_text("not a post")
    return d


@pytest.fixture(name="index_data")
def index_data_fixture(posts_dir):
    _, path = run_index(posts_dir, Settings())
    return json.loads(path.read_text(encoding="utf-8"))


# --- index artifact ---

def test_index_post_order(index_data):
    assert [p["slug"] for p in index_data["posts"]] == ["computer", "2025-09-20-web-dev", "closures"]
    assert [p["date"] for p in index_data["posts"]] == ["2025-09-23", "2025-09-20", "2025-09-18"]


def test_index_post_fields(index_data):
    computer, web, closures = index_data["posts"]
    assert computer["id"] == "post-computer"
    assert computer["category"] == "Computer Basics"
    assert computer["tags"] == ["Computer Science", "Hardware"]
    assert computer["excerpt"] == "A computer is a machine that processes information."
    assert web["title"] == "Getting Started with Web Development"
    assert web["category"] == "Web"
    assert web["tags"] == ["HTML", "CSS"]
    assert web["author"] == "SilentCoderHub"
    assert closures["excerpt"] == "How closures capture scope."
    assert closures["author"] == "Guest Author"


def test_index_aggregates(index_data):
    assert index_data["totalPosts"] == 3
    assert [c["name"] for c in index_data["categories"]] == ["Computer Basics", "General", "Web"]
    assert {t["name"]: t["count"] for t in index_data["tags"]} == {
        "Computer Science": 1, "Hardware": 1, "HTML": 1, "CSS": 1, "JavaScript": 1,
    }
    assert index_data["stats"]["latestPost"] == "2025-09-23"
    assert index_data["stats"]["oldestPost"] == "2025-09-18"
    assert index_data["stats"]["averageReadTime"] == 1


# --- runtime consumption ---

def test_session_uses_index(posts_dir, index_data):
    session = BlogSession.open(DirectoryStore(posts_dir), Settings())
    assert session.source is LoadSource.indexed
    assert [p.slug for p in session.posts] == [p["slug"] for p in index_data["posts"]]


def test_session_discovers_known_posts_without_index(posts_dir):
    session = BlogSession.open(DirectoryStore(posts_dir), Settings(known_posts=["closures", "computer", "missing"]))
    assert session.source is LoadSource.discovered
    assert [p.slug for p in session.posts] == ["computer", "closures"]


def test_session_search_after_index(posts_dir, index_data):
    session = BlogSession.open(DirectoryStore(posts_dir), Settings())
    assert [p.slug for p in session.search("hardware")] == ["computer"]
    assert [p.slug for p in session.search(" Web ")] == ["2025-09-20-web-dev"]
