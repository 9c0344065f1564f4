from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence


class PriorityMode(str, Enum):
    """
    Entry point into the fallback chain.

    Members are declared in chain order. Loading starts at the configured member and then
    always falls through forward until a step yields content.
    """

    CACHE = "cache"
    NETWORK = "network"
    CACHE_IGNORING_FRESHNESS = "cache_ignoring_freshness"
    DEFAULT = "default"

    @classmethod
    def chain_from(cls, mode: PriorityMode) -> Sequence[PriorityMode]:
        members = list(cls)
        return tuple(members[members.index(cls(mode)) :])


@dataclass(frozen=True, slots=True)
class LoadResult:
    key: str
    data: Mapping[str, Any]
    source: PriorityMode

    @property
    def key_count(self) -> int:
        return len(self.data)
