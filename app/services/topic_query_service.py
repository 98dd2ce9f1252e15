import re
import sys
from typing import Any, Callable, Dict, List, Optional

from app.core.exceptions.exceptions import InvalidInputError, StoreUnavailableError
from app.schemas.topics import SortOption, TopicQuery
from app.services.query_resolver import resolve
from app.services.result_cache import ResultCache, make_cache_key
from app.utils.log import app_logger

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50

_LEADING_INT = re.compile(r"^\s*([+-]?)0*(\d+)")
# longer digit runs saturate instead of being converted
MAX_DIGITS = 18


def parse_int(raw: Any) -> Optional[int]:
    """Read the leading integer of a query parameter ("3", " 3", "3abc" -> 3).

    Returns None for missing or non-numeric values. Values too long to be a
    sensible page or limit saturate to +/- sys.maxsize.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    sign, digits = match.groups()
    if len(digits) > MAX_DIGITS:
        return -sys.maxsize if sign == "-" else sys.maxsize
    return int(sign + digits)


def normalize_page(raw: Any) -> int:
    page = parse_int(raw)
    if page is None or page < 1:
        return DEFAULT_PAGE
    return page


def normalize_limit(raw: Any, default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    limit = parse_int(raw)
    if limit is None:
        return default
    return max(1, min(limit, maximum))


def normalize_sort(raw: Any) -> SortOption:
    return SortOption.NAME if raw == SortOption.NAME.value else SortOption.NONE


class TopicQueryService:
    """Serves topic searches: cache lookup, then resolve over a fresh snapshot on a miss.

    `load_snapshot` is any callable returning the current list of topic
    records; it is called only on cache misses.
    """

    def __init__(
        self,
        cache: ResultCache,
        load_snapshot: Callable[[], List[Dict[str, Any]]],
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ):
        self.cache = cache
        self.load_snapshot = load_snapshot
        self.default_limit = default_limit
        self.max_limit = max_limit

    def build_query(self, raw_search: Any, raw_sort: Any = None, raw_page: Any = None, raw_limit: Any = None) -> TopicQuery:
        if not isinstance(raw_search, str) or not raw_search:
            raise InvalidInputError("search")
        return TopicQuery(
            search=raw_search,
            sort=normalize_sort(raw_sort),
            page=normalize_page(raw_page),
            limit=normalize_limit(raw_limit, self.default_limit, self.max_limit),
        )

    def handle(self, raw_search: Any, raw_sort: Any = None, raw_page: Any = None, raw_limit: Any = None) -> Dict[str, Any]:
        query = self.build_query(raw_search, raw_sort, raw_page, raw_limit)

        cache_key = make_cache_key(query)
        cached = self.cache.get(cache_key)
        if cached is not None:
            app_logger.debug("topics.cache.hit", key=cache_key)
            return cached

        app_logger.debug("topics.cache.miss", key=cache_key)
        records = self._snapshot()
        result = resolve(records, query)
        self.cache.set(cache_key, result)
        app_logger.info(
            "topics.query.resolved",
            key=cache_key,
            total=result["pagination"]["total"],
            returned=len(result["data"]),
        )
        return result

    def _snapshot(self) -> List[Dict[str, Any]]:
        try:
            return self.load_snapshot()
        except StoreUnavailableError as e:
            app_logger.error("topics.store.error", error=e.message)
            raise
        except Exception as e:
            app_logger.error("topics.store.error", error=str(e))
            raise StoreUnavailableError("snapshot", str(e)) from e
