from __future__ import annotations

import logging
from pathlib import Path

from priority_loader.core.errors import UnsupportedKeyError

logger = logging.getLogger(__name__)


class BundledDefaultSource:
    """Baseline translations shipped with the application, read from `<assets_path>/<key>.json`."""

    def __init__(self, *, assets_path: str | Path) -> None:
        self._assets_path = Path(assets_path)

    def path_for(self, key: str) -> Path:
        return self._assets_path / f"{key}.json"

    def supports(self, key: str) -> bool:
        return self.path_for(key).is_file()

    async def load(self, key: str) -> str:
        path = self.path_for(key)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise UnsupportedKeyError(key, path) from exc
        if not content.strip():
            raise UnsupportedKeyError(key, path)
        return content
