"""Polling watcher that reports debounced changes to a posts directory"""

import logging
import time
from pathlib import Path
from typing import Callable

from blogindex.core.parse import discover_files
from blogindex.core.utils.hashing import sha256


logger = logging.getLogger(__name__)


def snapshot(posts_dir: Path) -> dict[str, str]:
    """Map each .html filename to the hash of its content; {} if the directory is gone."""
    if not posts_dir.is_dir():
        return {}
    state = {}
    for p in discover_files(posts_dir):
        try:
            state[p.name] = sha256(p.read_bytes())
        except OSError:
            continue  # removed between listing and reading
    return state


def changed_files(old: dict[str, str], new: dict[str, str]) -> list[str]:
    """Names added, removed, or modified between two snapshots."""
    return sorted(name for name in old.keys() | new.keys() if old.get(name) != new.get(name))


def watch_posts(
    posts_dir: Path,
    on_change: Callable[[list[str]], None],
    interval: float = 1.0,
    debounce: float = 1.0,
    should_stop: Callable[[], bool] = lambda: False,
    sleep: Callable[[float], None] = time.sleep,
    ) -> None:
    """Poll posts_dir until should_stop() is true, calling on_change after each quiet period.

    A change is reported once the directory has stayed unchanged for at least
    `debounce` seconds, so a burst of saves triggers a single callback.
    """
    logger.info("Watching %s for changes", posts_dir)
    current = snapshot(posts_dir)

    while not should_stop():
        sleep(interval)
        latest = snapshot(posts_dir)
        if latest == current:
            continue

        quiet = 0.0
        while quiet < debounce and not should_stop():
            sleep(interval)
            settled = snapshot(posts_dir)
            if settled == latest:
                quiet += interval
            else:
                latest, quiet = settled, 0.0

        changes = changed_files(current, latest)
        current = latest
        logger.info("Detected change in %s", ", ".join(changes))
        try:
            on_change(changes)
        except Exception as e:
            logger.error("Re-index after change failed: %s", e)
