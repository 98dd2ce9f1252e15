import json
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from app.core.exceptions.exceptions import StoreUnavailableError
from app.utils.log import app_logger


class TopicStore:
    """Loads the topic collection from a JSON file.

    Every call to `load_snapshot` reads the file again, so edits to the
    file show up as soon as the result cache stops serving older pages.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load_snapshot(self) -> List[Dict[str, Any]]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreUnavailableError(str(self.path), f"cannot read file: {e}") from e

        try:
            topics = json.loads(raw)
        except ValueError as e:
            raise StoreUnavailableError(str(self.path), f"invalid JSON: {e}") from e

        self._validate(topics)
        app_logger.debug("topics.store.loaded", path=str(self.path), count=len(topics))
        return topics

    def _validate(self, topics: Any) -> None:
        if not isinstance(topics, list):
            raise StoreUnavailableError(str(self.path), "expected a JSON array of topics")
        for index, topic in enumerate(topics):
            if not isinstance(topic, dict) or not isinstance(topic.get("name"), str):
                raise StoreUnavailableError(
                    str(self.path), f"topic at index {index} has no string 'name' field"
                )


class CachedTopicStore:
    """Wraps a `TopicStore` and reuses its last snapshot for `ttl_seconds`.

    Failed loads are not remembered; the next call tries the file again.
    """

    def __init__(self, store: TopicStore, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.store = store
        self.ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: Optional[List[Dict[str, Any]]] = None
        self._loaded_at = 0.0

    def load_snapshot(self) -> List[Dict[str, Any]]:
        with self._lock:
            if self._snapshot is not None and self._clock() - self._loaded_at < self.ttl:
                return self._snapshot
            self._snapshot = self.store.load_snapshot()
            self._loaded_at = self._clock()
            app_logger.info("topics.store.snapshot_refreshed", count=len(self._snapshot))
            return self._snapshot


def build_topic_store(path: Union[str, Path], snapshot_ttl_seconds: float = 0):
    """Return the store to use: plain re-read per miss, or snapshot-cached."""
    store = TopicStore(path)
    if snapshot_ttl_seconds > 0:
        return CachedTopicStore(store, snapshot_ttl_seconds)
    return store
