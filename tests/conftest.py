"""Root test configuration: isolate tests from local config and environment"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory with no BLOGINDEX_* env vars set."""
    for name in list(os.environ):
        if name.startswith("BLOGINDEX_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
