"""Document storage: read post markup and the index artifact by slug"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol

import requests

from blogindex.config import Settings


class StorageError(RuntimeError):
    """A post or index could not be read."""


class DocumentNotFound(StorageError):
    """The requested post or index does not exist."""


class DocumentStore(Protocol):
    def read(self, slug: str) -> str: ...
    def read_index(self) -> str: ...
    def list_slugs(self) -> list[str]: ...
    def modified(self, slug: str) -> Optional[datetime]: ...


class DirectoryStore:
    """Posts stored as <root>/<slug>.html with the index at <root>/<index_file>."""

    def __init__(self, root: Path, index_file: str = "posts.json", suffix: str = ".html"):
        self.root = Path(root)
        self.index_file = index_file
        self.suffix = suffix

    def path_for(self, slug: str) -> Path:
        return self.root / f"{slug}{self.suffix}"

    @property
    def index_path(self) -> Path:
        return self.root / self.index_file

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DocumentNotFound(f"Not found: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def read(self, slug: str) -> str:
        return self._read(self.path_for(slug))

    def read_index(self) -> str:
        return self._read(self.index_path)

    def list_slugs(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.iterdir() if p.is_file() and p.suffix == self.suffix)

    def modified(self, slug: str) -> Optional[datetime]:
        path = self.path_for(slug)
        if not path.exists():
            return None
        return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


class HttpStore:
    """Posts served over HTTP as <base_url>/<slug>.html, e.g. a deployed static blog."""

    def __init__(
        self,
        base_url: str,
        index_file: str = "posts.json",
        timeout: float = 10.0,
        suffix: str = ".html",
        session: requests.Session = None,
        ):
        self.base_url = base_url.rstrip("/")
        self.index_file = index_file
        self.timeout = timeout
        self.suffix = suffix
        self.session = session or requests.Session()

    def _get(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise StorageError(f"Request failed for {url}: {e}") from e
        if response.status_code == 404:
            raise DocumentNotFound(f"Not found: {url}")
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise StorageError(f"Request failed for {url}: {e}") from e
        return response.text

    def read(self, slug: str) -> str:
        return self._get(f"{self.base_url}/{slug}{self.suffix}")

    def read_index(self) -> str:
        return self._get(f"{self.base_url}/{self.index_file}")

    def list_slugs(self) -> list[str]:
        raise NotImplementedError("HttpStore cannot list posts; use the index or known_posts")

    def modified(self, slug: str) -> Optional[datetime]:
        return None


def open_store(location: str, settings: Settings) -> DocumentStore:
    """HttpStore for http(s) URLs, DirectoryStore for anything else."""
    if location.startswith(("http://", "https://")):
        return HttpStore(location, settings.index_file, timeout=settings.fetch_timeout)
    return DirectoryStore(Path(location), settings.index_file)
