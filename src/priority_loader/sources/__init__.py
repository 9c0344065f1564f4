"""Backing sources for the fallback chain."""

from priority_loader.sources.bundled import BundledDefaultSource
from priority_loader.sources.cache_store import CacheStore, resolve_cache_root
from priority_loader.sources.network import NetworkFetcher, static_origin

__all__ = ["BundledDefaultSource", "CacheStore", "NetworkFetcher", "resolve_cache_root", "static_origin"]
