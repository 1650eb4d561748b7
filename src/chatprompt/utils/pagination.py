"""
Query-string pagination for message listings.

    page_parser({"ordering": "asc", "limit": "10", "page": "2"})
    -> PageParams(ordering="ASC", offset=10, limit=10)
"""

from dataclasses import dataclass
from typing import Any, Literal, Mapping
import logging

logger = logging.getLogger(__name__)

DEFAULT_ORDERING: Literal["ASC", "DESC"] = "DESC"
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


@dataclass(frozen=True)
class PageParams:
    ordering: Literal["ASC", "DESC"] = DEFAULT_ORDERING
    offset: int = 0
    limit: int = DEFAULT_LIMIT


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def page_parser(query: Mapping[str, Any] | None) -> PageParams:
    """
    Build PageParams from query-string shaped input.

    - `ordering`: "asc"/"desc", case-insensitive; anything else -> DESC.
    - `limit`: clamped to [1, MAX_LIMIT]; missing/unparsable -> DEFAULT_LIMIT.
    - `offset` wins over `page`; `page` is 1-based. Negative values -> 0 / page 1.
    """
    query = query or {}

    ordering = str(query.get("ordering") or "").strip().upper()
    if ordering not in ("ASC", "DESC"):
        ordering = DEFAULT_ORDERING

    limit = _to_int(query.get("limit"))
    if limit is None:
        limit = DEFAULT_LIMIT
    limit = max(1, min(limit, MAX_LIMIT))

    offset = _to_int(query.get("offset"))
    if offset is None:
        page = _to_int(query.get("page"))
        offset = (max(page, 1) - 1) * limit if page is not None else 0
    offset = max(offset, 0)

    params = PageParams(ordering=ordering, offset=offset, limit=limit)
    logger.debug(f"Parsed pagination: {params}")
    return params
