"""Contract every resource service honours, plus the shared list checks."""

from typing import Any, Dict, Generic, List, Protocol, Sequence, TypeVar

from app.application.validators import is_valid_object_id
from app.config import get_settings
from app.core.exceptions import BadRequestException
from app.domain.schemas.common import SortField

T = TypeVar("T")

# Offsets are bound as signed 64-bit integers by the database drivers
MAX_OFFSET = 2**63 - 1


class CrudService(Protocol, Generic[T]):
    def add(self, data: Dict[str, Any]) -> T: ...

    def get_all(self, sort: Sequence[SortField] = (), page: int = 1, limit: int = 10) -> List[T]: ...

    def get_by_id(self, id: str) -> T: ...

    def update(self, id: str, patch: Dict[str, Any]) -> T: ...

    def delete(self, id: str) -> T: ...


def check_id(id: Any, resource: str) -> str:
    if not is_valid_object_id(id):
        raise BadRequestException(f"Invalid {resource} ID format")
    return id


def check_page(page: int, limit: int) -> int:
    """Validate page/limit and return the limit clamped to MAX_PAGE_SIZE."""
    if not isinstance(page, int) or page < 1:
        raise BadRequestException("Invalid page parameter")
    if not isinstance(limit, int) or limit < 1:
        raise BadRequestException("Invalid limit parameter")
    limit = min(limit, get_settings().MAX_PAGE_SIZE)
    if (page - 1) * limit > MAX_OFFSET:
        raise BadRequestException("Invalid page parameter")
    return limit


def check_sort(sort: Sequence[SortField], allowed: Sequence[str]) -> List[SortField]:
    for item in sort:
        if item.field not in allowed:
            raise BadRequestException(
                f"Sorting by '{item.field}' is not allowed. Allowed fields: {', '.join(allowed)}"
            )
    return list(sort)
