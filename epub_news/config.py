"""
Configuration management using YAML files, dataclasses and the environment.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: HTTP fetching settings
- OutputConfig: Ebook file and metadata settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container

Feed URLs and source credentials come from the environment (or a .env
file loaded by the CLI):
- RSS_FEEDS: comma separated feed URLs (required)
- LE_MONDE_COOKIE: member session cookie for Le Monde (optional)
- DEFAULT_EXPORT_PATH: default directory for the generated ebook (optional)
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml

from .errors import ConfigurationError


RSS_FEEDS_ENV = "RSS_FEEDS"
LE_MONDE_COOKIE_ENV = "LE_MONDE_COOKIE"
EXPORT_PATH_ENV = "DEFAULT_EXPORT_PATH"


@dataclass
class FetchConfig:
    """Configuration for HTTP fetching of feeds and articles.

    Attributes:
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    timeout_seconds: float = 30.0
    trust_env: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )


@dataclass
class OutputConfig:
    """Configuration for the generated ebook.

    Attributes:
        path: Directory where the ebook is written
        title: Ebook title, defaults to today's date
        description: Ebook description, defaults to "Les titres du <date>"
        language: Ebook language code
        author: Ebook author metadata
    """

    path: str = "."
    title: str | None = None
    description: str | None = None
    language: str = "fr"
    author: str = "Le Monde"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file (written next to the ebook)
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "epub_news.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections.

    Attributes:
        debug: Print feed contents while ingesting
        details: Report each extraction step while processing articles
    """

    fetch: FetchConfig = field(default_factory=FetchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False
    details: bool = False


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    cfg = AppConfig()
    export_path = os.getenv(EXPORT_PATH_ENV)
    if export_path:
        cfg.output.path = export_path
    if not path:
        return cfg

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(cfg, raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "fetch": {
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "trust_env": cfg.fetch.trust_env,
            "user_agent": cfg.fetch.user_agent,
        },
        "output": {
            "path": cfg.output.path,
            "title": cfg.output.title,
            "description": cfg.output.description,
            "language": cfg.output.language,
            "author": cfg.output.author,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
        "debug": cfg.debug,
        "details": cfg.details,
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        fetch=FetchConfig(**data["fetch"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
        debug=bool(data["debug"]),
        details=bool(data["details"]),
    )


def get_feed_urls(value: str | None = None) -> list[str]:
    """Read the comma separated feed list.

    Args:
        value: Raw feed list, defaults to the RSS_FEEDS environment variable

    Returns:
        Feed URLs with whitespace trimmed and empty entries dropped

    Raises:
        ConfigurationError: If no feed is configured
    """
    raw = value if value is not None else os.getenv(RSS_FEEDS_ENV, "")
    feeds = [url.strip() for url in raw.split(",") if url.strip()]
    if not feeds:
        raise ConfigurationError(
            f"Missing environment variable {RSS_FEEDS_ENV}. Add the RSS feeds you "
            f"want to monitor into {RSS_FEEDS_ENV} (comma separated)."
        )
    return feeds


def get_source_cookies() -> dict[str, str]:
    """Collect optional per-source session cookies from the environment."""
    cookies: dict[str, str] = {}
    le_monde = os.getenv(LE_MONDE_COOKIE_ENV)
    if le_monde:
        cookies["le_monde"] = le_monde
    return cookies
