from __future__ import annotations

from typing import Protocol

from priority_loader.core.models import PriorityMode


class CacheSource(Protocol):
    async def exists(self, key: str, *, ignore_freshness: bool = False) -> bool:
        """Return whether a usable cached entry exists for the key."""

    async def read(self, key: str) -> str:
        """Return the raw cached text; raise CacheEntryNotFoundError when absent."""

    async def write(self, key: str, content: str) -> None:
        """Persist content for the key, replacing any previous entry."""


class Fetcher(Protocol):
    async def fetch(self, key: str) -> str:
        """Return normalized remote content, or an empty string on any failure."""


class DefaultSource(Protocol):
    def supports(self, key: str) -> bool:
        """Return whether a bundled baseline exists for the key."""

    async def load(self, key: str) -> str:
        """Return the bundled baseline; raise UnsupportedKeyError when absent."""


class ChainStep(Protocol):
    mode: PriorityMode

    async def attempt(self, key: str) -> str:
        """Return content for the key, or an empty string to fall through."""
