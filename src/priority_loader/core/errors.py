from __future__ import annotations


class LoaderError(RuntimeError):
    pass


class CacheEntryNotFoundError(LoaderError):
    """Raised when a cached entry is read without existing."""

    def __init__(self, key: str, path: object) -> None:
        super().__init__(f"Cached entry not found. key={key} path={path}")
        self.key = key
        self.path = path


class MalformedContentError(LoaderError):
    """Raised when a payload does not decode to a JSON object."""

    def __init__(self, message: str, *, key: str, source: str) -> None:
        super().__init__(f"{message} key={key} source={source}")
        self.key = key
        self.source = source


class UnsupportedKeyError(LoaderError):
    """Raised when no bundled default exists for a key."""

    def __init__(self, key: str, path: object) -> None:
        super().__init__(f"No bundled asset for key. key={key} path={path}")
        self.key = key
        self.path = path
