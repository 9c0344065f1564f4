from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from priority_loader.config.models import LoaderSettings
from priority_loader.core.errors import CacheEntryNotFoundError, MalformedContentError
from priority_loader.core.models import LoadResult, PriorityMode
from priority_loader.interfaces import CacheSource, ChainStep, DefaultSource, Fetcher
from priority_loader.sources.bundled import BundledDefaultSource
from priority_loader.sources.cache_store import CacheStore, resolve_cache_root
from priority_loader.sources.network import NetworkFetcher, OriginResolver, static_origin

logger = logging.getLogger(__name__)


async def _read_cache(cache: CacheSource, key: str, *, ignore_freshness: bool) -> str:
    try:
        if not await cache.exists(key, ignore_freshness=ignore_freshness):
            return ""
        return await cache.read(key)
    except CacheEntryNotFoundError:
        logger.debug("Cached file disappeared before read. key=%s", key)
        return ""
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(
            "Failed to read cached translations. key=%s ignore_freshness=%s error=%s",
            key,
            ignore_freshness,
            exc,
        )
        return ""


@dataclass(slots=True)
class CacheStep:
    cache: CacheSource
    mode: PriorityMode = PriorityMode.CACHE

    async def attempt(self, key: str) -> str:
        return await _read_cache(self.cache, key, ignore_freshness=False)


@dataclass(slots=True)
class NetworkStep:
    fetcher: Fetcher
    mode: PriorityMode = PriorityMode.NETWORK

    async def attempt(self, key: str) -> str:
        return await self.fetcher.fetch(key)


@dataclass(slots=True)
class StaleCacheStep:
    cache: CacheSource
    mode: PriorityMode = PriorityMode.CACHE_IGNORING_FRESHNESS

    async def attempt(self, key: str) -> str:
        return await _read_cache(self.cache, key, ignore_freshness=True)


@dataclass(slots=True)
class DefaultStep:
    source: DefaultSource
    mode: PriorityMode = PriorityMode.DEFAULT

    async def attempt(self, key: str) -> str:
        return await self.source.load(key)


_LOADED_MESSAGES = {
    PriorityMode.CACHE: "loaded cached translations",
    PriorityMode.NETWORK: "loaded from network",
    PriorityMode.CACHE_IGNORING_FRESHNESS: "loaded from stale cache",
    PriorityMode.DEFAULT: "loaded from assets",
}


def _decode(content: str, *, key: str, source: PriorityMode) -> Dict[str, Any]:
    try:
        data = json.loads(content)
    except ValueError as exc:
        raise MalformedContentError("Translations are not valid JSON.", key=key, source=source.value) from exc
    if not isinstance(data, dict):
        raise MalformedContentError(
            f"Translations must be a JSON object, got {type(data).__name__}.",
            key=key,
            source=source.value,
        )
    return data


class LoadOrchestrator:
    """
    Runs the fallback chain cache -> network -> stale cache -> bundled default.

    The chain starts at the requested mode and stops at the first step that yields content.
    The result is then checked against the bundled baseline: if the baseline has more keys,
    the baseline wins.
    """

    def __init__(self, *, cache: CacheSource, fetcher: Fetcher, bundled: DefaultSource) -> None:
        self._bundled = bundled
        self._steps: Sequence[ChainStep] = (
            CacheStep(cache),
            NetworkStep(fetcher),
            StaleCacheStep(cache),
            DefaultStep(bundled),
        )

    async def load(self, key: str, mode: PriorityMode = PriorityMode.CACHE) -> LoadResult:
        chain = PriorityMode.chain_from(mode)
        content = ""
        chosen = PriorityMode.DEFAULT
        for step in self._steps:
            if step.mode not in chain:
                continue
            content = await step.attempt(key)
            if content:
                chosen = step.mode
                break

        logger.info("Translations %s. key=%s entry=%s", _LOADED_MESSAGES[chosen], key, PriorityMode(mode).value)
        return await self._validate(key, content, chosen)

    async def _validate(self, key: str, content: str, chosen: PriorityMode) -> LoadResult:
        data = _decode(content, key=key, source=chosen)
        if chosen is PriorityMode.DEFAULT:
            return LoadResult(key=key, data=data, source=chosen)

        baseline = _decode(await self._bundled.load(key), key=key, source=PriorityMode.DEFAULT)
        if len(baseline) > len(data):
            logger.warning(
                "Loaded translations have fewer keys than bundled assets; using assets. key=%s source=%s loaded_keys=%s asset_keys=%s",
                key,
                chosen.value,
                len(data),
                len(baseline),
            )
            return LoadResult(key=key, data=baseline, source=PriorityMode.DEFAULT)
        return LoadResult(key=key, data=data, source=chosen)


class PriorityResourceLoader:
    """
    Translation loader assembled from `LoaderSettings`.

    Example:
        loader = PriorityResourceLoader(
            settings=LoaderSettings(assets_path="assets/translations", timeout_seconds=10),
            origin_resolver=lambda key: "https://cdn.example.com/locales/",
        )
        translations = await loader.load("en_US")
    """

    def __init__(self, *, settings: LoaderSettings, origin_resolver: Optional[OriginResolver] = None) -> None:
        if origin_resolver is None:
            if not settings.origin_base_url:
                raise ValueError("An origin resolver or loader.origin_base_url is required.")
            origin_resolver = static_origin(settings.origin_base_url)

        self.settings = settings
        self.cache = CacheStore(
            cache_root=resolve_cache_root(settings.cache_dir),
            local_cache_duration=settings.local_cache_duration,
            network_file_creation_date=settings.network_file_creation_date,
        )
        self.fetcher = NetworkFetcher(origin_resolver=origin_resolver, timeout=settings.timeout, cache=self.cache)
        self.bundled = BundledDefaultSource(assets_path=settings.assets_path)
        self._orchestrator = LoadOrchestrator(cache=self.cache, fetcher=self.fetcher, bundled=self.bundled)

    def supports(self, key: str) -> bool:
        return self.bundled.supports(key)

    async def load_result(self, key: str, mode: Optional[PriorityMode] = None) -> LoadResult:
        return await self._orchestrator.load(key, mode or self.settings.priority_load_type)

    async def load(self, key: str) -> Dict[str, Any]:
        result = await self.load_result(key)
        return dict(result.data)
