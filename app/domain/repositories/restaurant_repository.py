"""
Restaurant Repository Interface.
"""

from typing import Optional

from app.domain.models.restaurant import Restaurant
from app.domain.repositories.base import BaseRepository


class RestaurantRepository(BaseRepository[Restaurant]):
    """Interface for Restaurant-specific lookups."""

    def get_by_name(self, name: str) -> Optional[Restaurant]:
        """Exact, case-sensitive name match."""
        ...
