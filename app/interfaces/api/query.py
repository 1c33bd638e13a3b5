"""Query-string parsing for the list endpoints."""

from typing import List, Optional, Tuple

from app.config import get_settings
from app.core.exceptions import BadRequestException
from app.domain.schemas.common import SortField

MENU_SORT_FIELDS = ("category", "price")
RESTAURANT_SORT_FIELDS = ("name", "address")


def _parse_int(raw: Optional[str], default: int, message: str) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BadRequestException(message)
    if value < 1:
        raise BadRequestException(message)
    return value


def parse_pagination(page: Optional[str], limit: Optional[str]) -> Tuple[int, int]:
    """1-based page and a page size silently clamped to MAX_PAGE_SIZE."""
    settings = get_settings()
    page_number = _parse_int(page, 1, "Invalid page parameter")
    page_size = _parse_int(limit, settings.DEFAULT_PAGE_SIZE, "Invalid limit parameter")
    return page_number, min(page_size, settings.MAX_PAGE_SIZE)


def parse_menu_sort(sort: Optional[str]) -> List[SortField]:
    """`category:asc,price:desc` -> ordered fields; unknown fields are an error."""
    if not sort:
        return []

    directions = {}
    for pair in (part.strip() for part in sort.split(",")):
        if not pair:
            continue
        field, _, order = (p.strip() for p in pair.partition(":"))
        if not field:
            continue
        if field not in MENU_SORT_FIELDS:
            raise BadRequestException(
                f"Sorting by '{field}' is not allowed. Allowed fields: {', '.join(MENU_SORT_FIELDS)}"
            )
        # A repeated field keeps its first position and takes the last direction
        directions[field] = order == "desc"

    return [SortField(field, descending) for field, descending in directions.items()]


def parse_restaurant_sort(sort: Optional[str]) -> List[SortField]:
    """`name` or `-name`; anything outside the allow-list is ignored."""
    if not sort:
        return []

    field = sort.replace("-", "", 1)
    if field not in RESTAURANT_SORT_FIELDS:
        return []
    return [SortField(field, descending=sort.startswith("-"))]
