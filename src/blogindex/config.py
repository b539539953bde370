"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "BLOGINDEX_"


class Settings(BaseModel):
    app_name:         str = "blogindex"
    posts_dir:        str = Field(default="posts",        description="Directory holding the HTML post files")
    index_file:       str = Field(default="posts.json",   description="Index artifact filename inside posts_dir")
    author:           str = Field(default="SilentCoderHub", description="Author used when a post has no author meta")
    words_per_minute: int = Field(default=200, ge=1, description="Reading speed used for read time")
    excerpt_length:   int = Field(default=200, ge=1, description="Max excerpt characters before '...'")
    default_category: str = Field(default="General",      description="Category used when none is found")
    default_tags: list[str] = Field(default_factory=lambda: ["Blog"], min_length=1, description="Tags used when none are found")
    max_tags:         int = Field(default=10, ge=1, description="Max popular tags in the index and sidebar")
    posts_per_page:   int = Field(default=5,  ge=1, description="Posts shown per page")
    max_recent_posts: int = Field(default=5,  ge=0, description="Posts listed under recent posts")
    known_posts: list[str] = Field(
        default_factory=lambda: ["what-exactly-is-a-computer"],
        description="Post slugs loaded when no index artifact is available",
    )
    fetch_timeout:  float = Field(default=10.0, gt=0, description="Seconds before a remote read is abandoned")
    watch_interval: float = Field(default=1.0,  gt=0, description="Seconds between directory polls in watch mode")
    watch_debounce: float = Field(default=1.0,  ge=0, description="Quiet seconds required before re-indexing")
    log_level:        str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def _env_value(name: str, val: str) -> Any:
    """Split comma-separated env values for list fields."""
    if Settings.model_fields[name].annotation == list[str]:
        return [v.strip() for v in val.split(",") if v.strip()]
    return val


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BLOGINDEX_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = _env_value(name, val)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
