"""
Logging for EPUB News runs.

Console output goes through Rich. When enabled, a file handler next to the
ebook records one JSON object per line, carrying the structured fields
(event, feed, link, error, ...) passed to log_event.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from .config import LoggingConfig


LOGGER_NAME = "epub_news"


def setup_logging(cfg: LoggingConfig, output_dir: Path | None) -> logging.Logger:
    """Configure the "epub_news" logger from cfg and return it.

    The file handler is only attached when cfg.file is set and an output
    directory is known. httpx request logs are limited to warnings.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_string(cfg.level))
    logger.handlers = []
    logger.propagate = False

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
        console_handler.setLevel(_level_from_string(cfg.level))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if cfg.file and output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        file_path = output_dir / cfg.filename
        file_handler = logging.FileHandler(file_path, encoding="utf-8")
        file_handler.setLevel(_level_from_string(cfg.level))
        file_handler.setFormatter(_build_file_formatter(cfg.format))
        logger.addHandler(file_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger


def log_event(logger: logging.Logger | None, message: str, level: int = logging.INFO, **fields: Any) -> None:
    """Log message with fields attached as structured extras."""
    if logger is None:
        return
    logger.log(level, message, extra=fields)


class JsonlFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extract_extras(record))
        return json.dumps(payload, ensure_ascii=True, default=str)


def _extract_extras(record: logging.LogRecord) -> dict[str, Any]:
    reserved = set(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
        "message",
        "asctime",
        "taskName",
    }
    extras = {}
    for key, value in record.__dict__.items():
        if key in reserved:
            continue
        extras[key] = value
    return extras


def _build_file_formatter(fmt: str) -> logging.Formatter:
    if fmt == "jsonl":
        return JsonlFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(message)s")


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
