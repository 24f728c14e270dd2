import hashlib
import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

import orjson

from ..models import FilterCriteria, SortOption

logger = logging.getLogger(__name__)


def _criteria_payload(criteria: FilterCriteria) -> Dict[str, Any]:
    data = criteria.model_dump(mode="json", exclude_defaults=True)
    # set fields dump as lists in arbitrary order
    return {k: sorted(v) if isinstance(v, list) else v for k, v in data.items()}


def make_key(criteria: FilterCriteria, sort: Optional[SortOption] = None, page: int = 1, limit: int = 24) -> str:
    payload = {
        "criteria": _criteria_payload(criteria),
        "sort": sort.model_dump(mode="json") if sort else None,
        "page": page,
        "limit": limit,
    }
    digest = hashlib.sha1(orjson.dumps(payload, option=orjson.OPT_SORT_KEYS)).hexdigest()
    return f"products:{digest}"


class ResponseCache:
    """
    Expiring in-memory map for listing responses.
    No locking: two requests missing on the same key both fetch, and the last
    write wins. Past max_entries, expired entries go first, then the oldest.
    """

    def __init__(self, ttl_seconds: float = 30.0, max_entries: int = 100, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("cache miss %s", key)
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            self._entries.pop(key, None)
            logger.debug("cache expired %s", key)
            return None
        logger.debug("cache hit %s", key)
        return value

    def set(self, key: str, value: Any) -> None:
        # re-insert so dict order stays oldest-first
        self._entries.pop(key, None)
        self._entries[key] = (self._clock(), value)
        if len(self._entries) > self.max_entries:
            self.purge_expired()
        while len(self._entries) > self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("cache evicted %s", oldest)

    def purge_expired(self) -> int:
        cutoff = self._clock() - self.ttl_seconds
        stale = [k for k, (stored_at, _) in self._entries.items() if stored_at <= cutoff]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


class NullCache:
    """Never stores anything."""

    def get(self, key: str) -> None:
        return None

    def set(self, key: str, value: Any) -> None:
        pass

    def clear(self) -> None:
        pass
