import copy
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import quote

from app.schemas.topics import TopicQuery

DEFAULT_TTL_SECONDS = 300


def make_cache_key(query: TopicQuery) -> str:
    """Build the cache key for a normalized query.

    The search term is percent-quoted so it can never contain the ':'
    separator, which keeps distinct queries on distinct keys.
    """
    term = quote(query.search, safe="")
    return f"topics:{term}:{query.sort.value}:{query.page}:{query.limit}"


class ResultCache:
    """In-memory TTL cache for resolved topic pages.

    Entries expire a fixed `ttl_seconds` after they were set; reading an
    entry does not extend it. Expired entries are dropped when they are
    next looked up. Values are deep-copied on the way in and out.

    Capacity is unbounded. That is fine for a small topic file with a
    bounded set of realistic queries; anything larger should put a size
    bound (LRU) or a shared cache such as Redis in front of the service.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._store: Dict[str, Tuple[float, Any]] = {}  # key -> (expires_at, value)

    def set(self, key: str, value: Any) -> None:
        entry = (self._clock() + self.ttl, copy.deepcopy(value))
        with self._lock:
            self._store[key] = entry

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                # expired
                del self._store[key]
                return None
        return copy.deepcopy(value)

    def clear(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def flush(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for expires_at, _ in self._store.values() if now < expires_at)
