"""Prioritized multi-source loader for locale translation files."""

from priority_loader.core.errors import (
    CacheEntryNotFoundError,
    LoaderError,
    MalformedContentError,
    UnsupportedKeyError,
)
from priority_loader.core.models import LoadResult, PriorityMode
from priority_loader.loader import LoadOrchestrator, PriorityResourceLoader

__all__ = [
    "CacheEntryNotFoundError",
    "LoadOrchestrator",
    "LoadResult",
    "LoaderError",
    "MalformedContentError",
    "PriorityMode",
    "PriorityResourceLoader",
    "UnsupportedKeyError",
]
