from __future__ import annotations

import asyncio
import json
import logging
from datetime import timedelta
from typing import Callable, Optional, Protocol

import aiohttp

logger = logging.getLogger(__name__)

OriginResolver = Callable[[str], str]


class ContentWriter(Protocol):
    async def write(self, key: str, content: str) -> None:
        ...


class FetchError(RuntimeError):
    pass


def static_origin(base_url: str) -> OriginResolver:
    """Return a resolver that serves every key from the same base URL."""

    def _resolve(_key: str) -> str:
        return base_url

    return _resolve


class NetworkFetcher:
    """
    Downloads `<origin>/<key>.json` and saves the normalized JSON to the cache.

    Every failure is soft: it is logged and an empty string is returned.
    """

    def __init__(
        self,
        *,
        origin_resolver: OriginResolver,
        timeout: timedelta,
        cache: Optional[ContentWriter] = None,
    ) -> None:
        self._origin_resolver = origin_resolver
        self._timeout = timeout
        self._cache = cache

    def url_for(self, key: str) -> str:
        return f"{self._origin_resolver(key)}{key}.json"

    async def fetch(self, key: str) -> str:
        url = self.url_for(key)
        logger.debug("NetworkFetcher fetch: start. key=%s url=%s", key, url)
        try:
            data = await self._get_json(url)
            if not isinstance(data, dict):
                raise FetchError(f"Expected a JSON object, got {type(data).__name__}.")
            content = json.dumps(data, ensure_ascii=False)
        except asyncio.TimeoutError:
            logger.warning(
                "Translation download timed out. key=%s url=%s timeout_seconds=%s",
                key,
                url,
                self._timeout.total_seconds(),
            )
            return ""
        except (aiohttp.ClientError, ValueError, FetchError) as exc:
            logger.warning("Translation download failed. key=%s url=%s error=%s: %s", key, url, type(exc).__name__, exc)
            return ""

        await self._save(key, content)
        return content

    async def _get_json(self, url: str) -> object:
        timeout = aiohttp.ClientTimeout(total=self._timeout.total_seconds())
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as response:
                response.raise_for_status()
                return await response.json(content_type=None)

    async def _save(self, key: str, content: str) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.write(key, content)
        except (OSError, ValueError):
            logger.exception("Failed to save downloaded translations to cache. key=%s", key)
