"""
Menu Repository Interface.
"""

from typing import List, Optional

from app.domain.models.menu import Menu
from app.domain.repositories.base import BaseRepository


class MenuRepository(BaseRepository[Menu]):
    """Interface for Menu-specific lookups."""

    def get_by_restaurant_and_name(self, restaurant_id: str, name: str) -> Optional[Menu]:
        ...

    def list_by_restaurant(self, restaurant_id: str) -> List[Menu]:
        ...

    def delete_by_restaurant(self, restaurant_id: str) -> int:
        """Delete every menu of a restaurant in the open transaction; returns how many went.

        The caller commits.
        """
        ...
