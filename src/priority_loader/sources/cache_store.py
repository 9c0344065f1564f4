from __future__ import annotations

import logging
import tempfile
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional

from priority_loader.core.errors import CacheEntryNotFoundError

logger = logging.getLogger(__name__)

CACHE_SUBDIR = "translations"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    # Naive values are host local time, like file modification times.
    return dt.astimezone(timezone.utc)


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(path)
    finally:
        tmp_path.unlink(missing_ok=True)


def resolve_cache_root(configured: Optional[str] = None) -> Path:
    """Resolve the cache root once: the configured directory, else the system temp directory."""
    if configured:
        return Path(configured)
    return Path(tempfile.gettempdir())


class CacheStore:
    """
    Persisted translation files under `<cache_root>/translations/<key>.json`.

    Freshness is the file's modification time. When `network_file_creation_date` is set,
    an entry is usable only if written strictly after it, and the duration check and
    `ignore_freshness` no longer apply.
    """

    def __init__(
        self,
        *,
        cache_root: Path,
        local_cache_duration: timedelta,
        network_file_creation_date: Optional[datetime] = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._cache_dir = Path(cache_root) / CACHE_SUBDIR
        self._local_cache_duration = local_cache_duration
        self._network_file_creation_date = (
            _as_utc(network_file_creation_date) if network_file_creation_date is not None else None
        )
        self._clock = clock

    def path_for(self, key: str) -> Path:
        return self._cache_dir / f"{key}.json"

    async def file_date(self, key: str) -> Optional[datetime]:
        path = self.path_for(key)
        try:
            mtime = path.stat().st_mtime
        except FileNotFoundError:
            return None
        return datetime.fromtimestamp(mtime, tz=timezone.utc)

    async def exists(self, key: str, *, ignore_freshness: bool = False) -> bool:
        file_date = await self.file_date(key)
        if file_date is None:
            logger.debug("CacheStore exists: no cached file. key=%s", key)
            return False

        if self._network_file_creation_date is not None:
            usable = file_date > self._network_file_creation_date
            logger.debug(
                "CacheStore exists: compared with network file date. key=%s file_date=%s network_date=%s usable=%s",
                key,
                file_date,
                self._network_file_creation_date,
                usable,
            )
            return usable

        if ignore_freshness:
            return True

        age = _as_utc(self._clock()) - file_date
        if age > self._local_cache_duration:
            logger.debug(
                "CacheStore exists: cached file expired. key=%s age_seconds=%s limit_seconds=%s",
                key,
                age.total_seconds(),
                self._local_cache_duration.total_seconds(),
            )
            return False
        return True

    async def read(self, key: str) -> str:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise CacheEntryNotFoundError(key, path) from exc

    async def write(self, key: str, content: str) -> None:
        path = self.path_for(key)
        _atomic_write_text(path, content)
        logger.debug("CacheStore write: saved. key=%s path=%s chars=%s", key, path, len(content))
