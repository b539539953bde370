"""Data models for extracted post metadata and the posts index artifact"""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field


_LEADING_INT_RE = re.compile(r'^\s*(\d+)')


class _Record(BaseModel):
    """Base for JSON records: camelCase aliases on the wire, snake_case in Python."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


class PostMetadata(_Record):
    """Metadata for a single post; every field has a value."""
    id:            str
    title:         str
    excerpt:       str
    date:          str                          # YYYY-MM-DD
    category:      str
    tags:          list[str]
    author:        str
    read_time:     str = Field(alias="readTime")    # "<N> min read"
    slug:          str
    word_count:    Optional[int] = Field(default=None, ge=0, alias="wordCount")
    last_modified: Optional[str] = Field(default=None, alias="lastModified")

    @property
    def read_minutes(self) -> int:
        """Leading integer of read_time, 0 if it has none."""
        m = _LEADING_INT_RE.match(self.read_time)
        return int(m.group(1)) if m else 0


class CategoryCount(_Record):
    name:        str
    count:       int
    description: str = ""


class TagCount(_Record):
    name:  str
    count: int


class IndexStats(_Record):
    total_words:       int = Field(default=0, alias="totalWords")
    average_read_time: Optional[int] = Field(default=None, alias="averageReadTime")
    latest_post:       Optional[str] = Field(default=None, alias="latestPost")
    oldest_post:       Optional[str] = Field(default=None, alias="oldestPost")


class PostsIndex(_Record):
    """Aggregate snapshot written to posts.json by the indexer."""
    generated:   str
    total_posts: int = Field(alias="totalPosts")
    posts:       list[PostMetadata] = []
    categories:  list[CategoryCount] = []
    tags:        list[TagCount] = []
    stats:       IndexStats = IndexStats()


@dataclass
class ParsedDoc:
    """Internal parse result carrying the BeautifulSoup tree; not persisted."""
    slug:     str
    html:     str
    soup:     BeautifulSoup
    path:     Optional[Path] = None
    modified: Optional[datetime] = None
