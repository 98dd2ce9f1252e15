import math
import unicodedata
from typing import Any, Dict, List, Sequence, Tuple

from app.schemas.topics import Pagination, SortOption, TopicQuery


def matches(record: Dict[str, Any], term: str) -> bool:
    """Case-insensitive substring match of `term` against the record name."""
    return term.casefold() in record["name"].casefold()


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _primary(text: str) -> Tuple[Tuple[int, str], ...]:
    # spaces and punctuation sort before digits and letters
    return tuple((1 if ch.isalnum() else 0, ch) for ch in _strip_accents(text).casefold())


def collation_key(name: str) -> Tuple[Tuple[Tuple[int, str], ...], str, str]:
    """Locale-aware ordering key for topic names.

    Compares base characters first, with punctuation and spaces ahead of
    digits and letters ("a b" < "a~b" < "ab"), then accents, then case,
    with lowercase sorting before uppercase at the last level
    ("go" < "Go" < "Golang").
    The result is independent of the process locale.
    """
    folded = unicodedata.normalize("NFKD", name).casefold()
    return (_primary(name), folded, name.swapcase())


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0


def filter_and_sort(records: Sequence[Dict[str, Any]], query: TopicQuery) -> List[Dict[str, Any]]:
    filtered = [r for r in records if matches(r, query.search)]
    if query.sort is SortOption.NAME:
        # sorted() is stable: equal names keep their filtered order
        filtered = sorted(filtered, key=lambda r: collation_key(r["name"]))
    return filtered


def resolve(records: Sequence[Dict[str, Any]], query: TopicQuery) -> Dict[str, Any]:
    """Filter, sort and paginate `records` for a normalized `query`.

    Pure: `records` is not modified and the same inputs always give the same
    output. A page past the end yields an empty `data` list.
    """
    filtered = filter_and_sort(records, query)

    start = (query.page - 1) * query.limit
    page_items = filtered[start : start + query.limit]

    pagination = Pagination(
        total=len(filtered),
        page=query.page,
        limit=query.limit,
        totalPages=total_pages(len(filtered), query.limit),
    )
    return {"data": page_items, "pagination": pagination.model_dump()}
