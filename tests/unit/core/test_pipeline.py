"""Unit tests for core/pipeline.py"""

import json

import pytest

from blogindex.config import Settings
from blogindex.core.pipeline import run_index, run_watch


@pytest.fixture(name="posts_dir")
def posts_dir_fixture(tmp_path):
    d = tmp_path / "posts"
    d.mkdir()
    (d / "first.html").write_text(
        '<meta name="date" content="2025-09-20"><meta name="keywords" content="X, Y"><h1>First</h1>',
        encoding="utf-8",
    )
    (d / "second.html").write_text(
        '<meta name="date" content="2025-09-23"><meta name="keywords" content="X"><h1>Second</h1>',
        encoding="utf-8",
    )
    return d


def test_run_index_writes_default_location(posts_dir):
    index, path = run_index(posts_dir, Settings())
    assert path == posts_dir / "posts.json"
    assert path.exists()
    assert [p.slug for p in index.posts] == ["second", "first"]


def test_run_index_custom_output(posts_dir, tmp_path):
    _, path = run_index(posts_dir, Settings(), tmp_path / "site" / "index.json")
    assert path == tmp_path / "site" / "index.json"
    assert json.loads(path.read_text())["totalPosts"] == 2


def test_run_index_tag_counts(posts_dir):
    index, _ = run_index(posts_dir, Settings())
    assert [(t.name, t.count) for t in index.tags] == [("X", 2), ("Y", 1)]


def test_run_index_missing_dir_raises(tmp_path):
    with pytest.raises(RuntimeError, match="Posts directory not found"):
        run_index(tmp_path / "nope", Settings())


def test_run_index_empty_dir(tmp_path):
    index, path = run_index(tmp_path, Settings())
    assert index.total_posts == 0
    assert json.loads(path.read_text())["posts"] == []


def test_run_index_skips_unreadable_file(posts_dir):
    (posts_dir / "broken.html").write_bytes(b"\xff\xfe\xfa not utf-8")
    index, _ = run_index(posts_dir, Settings())
    assert [p.slug for p in index.posts] == ["second", "first"]


def test_run_index_idempotent_except_generated(posts_dir):
    """Two runs over unchanged posts differ only in the generated timestamp."""
    _, path = run_index(posts_dir, Settings())
    first = json.loads(path.read_text())
    _, path = run_index(posts_dir, Settings())
    second = json.loads(path.read_text())
    first.pop("generated")
    second.pop("generated")
    assert first == second


def test_run_watch_indexes_then_watches(posts_dir):
    indexed = []
    run_watch(
        posts_dir, Settings(),
        on_index=lambda index, path: indexed.append(index.total_posts),
        should_stop=lambda: True,
    )
    assert indexed == [2]


def test_run_watch_reindexes_on_change(posts_dir):
    indexed = []
    steps = [lambda: (posts_dir / "third.html").write_text("<h1>Third</h1>"), lambda: None]

    def sleep(seconds):
        if steps:
            steps.pop(0)()

    calls = {"n": 0}

    def should_stop():
        calls["n"] += 1
        return calls["n"] > 3

    run_watch(
        posts_dir, Settings(watch_debounce=1.0, watch_interval=1.0),
        on_index=lambda index, path: indexed.append(index.total_posts),
        should_stop=should_stop, sleep=sleep,
    )
    assert indexed == [2, 3]
