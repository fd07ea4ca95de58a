"""
Media sources.

Each supported media implements ExtractionStrategy; the registry
picks the right one for a feed URL.
"""

from .base import ExtractionStrategy, SourceOptions
from .gamekult import GamekultSource
from .le_monde import LeMondeSource
from .registry import register_source, resolve_or_raise, resolve_source

__all__ = [
    "ExtractionStrategy",
    "SourceOptions",
    "GamekultSource",
    "LeMondeSource",
    "register_source",
    "resolve_or_raise",
    "resolve_source",
]
