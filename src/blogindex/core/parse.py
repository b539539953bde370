"""File discovery and HTML parsing into ParsedDoc trees"""

from datetime import datetime, timezone
from pathlib import Path

from bs4 import BeautifulSoup

from blogindex.core.models import ParsedDoc


HTML_EXTENSIONS = {'.html'}
HTML_PARSER = 'html.parser'


def discover_files(path: Path) -> list[Path]:
    """Return sorted .html files directly under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in HTML_EXTENSIONS else []
    return sorted(p for p in path.iterdir() if p.is_file() and p.suffix in HTML_EXTENSIONS)


def parse_html(html: str, slug: str, path: Path = None, modified: datetime = None) -> ParsedDoc:
    """Parse raw markup into a ParsedDoc keyed by slug."""
    return ParsedDoc(
        slug=slug,
        html=html,
        soup=BeautifulSoup(html, HTML_PARSER),
        path=path,
        modified=modified,
    )


def parse_file(path: Path) -> ParsedDoc:
    """Parse a single HTML file; slug is the filename stem."""
    html = path.read_text(encoding='utf-8')
    modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    return parse_html(html, path.stem, path=path, modified=modified)
