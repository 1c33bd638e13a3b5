"""Restaurant service — name uniqueness and lifecycle of restaurants."""

from typing import Any, Dict, List, Optional, Sequence

import structlog

from app.application.services.base import check_id, check_page, check_sort
from app.config import get_settings
from app.core.exceptions import BadRequestException, EntityNotFoundException
from app.domain.models.restaurant import Restaurant
from app.domain.repositories.menu_repository import MenuRepository
from app.domain.repositories.restaurant_repository import RestaurantRepository
from app.domain.schemas.common import SortField

logger = structlog.get_logger(__name__)

SORTABLE_FIELDS = ("name", "address")
FIELDS = ("name", "address", "phone", "opening_hours")


class RestaurantService:
    def __init__(self, repo: RestaurantRepository, menus: Optional[MenuRepository] = None):
        self.repo = repo
        # Only needed for the "cascade" delete policy
        self.menus = menus

    def _ensure_unique_name(self, name: str, exclude_id: Optional[str] = None) -> None:
        existing = self.repo.get_by_name(name)
        if existing and existing.id != exclude_id:
            raise BadRequestException("Name for this restaurant is already in use")

    def add(self, data: Dict[str, Any]) -> Restaurant:
        self._ensure_unique_name(data["name"])
        restaurant = self.repo.create({field: data[field] for field in FIELDS})
        logger.info("Restaurant created", restaurant_id=restaurant.id, name=restaurant.name)
        return restaurant

    def get_all(self, sort: Sequence[SortField] = (), page: int = 1, limit: int = 10) -> List[Restaurant]:
        limit = check_page(page, limit)
        sort = check_sort(sort, SORTABLE_FIELDS)
        return self.repo.list(skip=(page - 1) * limit, limit=limit, sort=sort)

    def get_by_id(self, id: str) -> Restaurant:
        check_id(id, "restaurant")
        restaurant = self.repo.get_by_id(id)
        if not restaurant:
            raise EntityNotFoundException("Restaurant not found")
        return restaurant

    def get_by_name(self, name: str) -> Optional[Restaurant]:
        return self.repo.get_by_name(name)

    def exists(self, id: str) -> bool:
        return self.repo.get_by_id(id) is not None

    def update(self, id: str, patch: Dict[str, Any]) -> Restaurant:
        restaurant = self.get_by_id(id)

        if patch.get("name"):
            self._ensure_unique_name(patch["name"], exclude_id=restaurant.id)

        changes = {field: patch[field] for field in FIELDS if patch.get(field)}
        restaurant = self.repo.update(restaurant, changes)
        logger.info("Restaurant updated", restaurant_id=restaurant.id, fields=sorted(changes))
        return restaurant

    def delete(self, id: str) -> Restaurant:
        check_id(id, "restaurant")
        restaurant = self.repo.get_by_id(id)
        if not restaurant:
            raise EntityNotFoundException("Restaurant not found")

        removed = 0
        if get_settings().RESTAURANT_DELETE_POLICY == "cascade" and self.menus is not None:
            # Left uncommitted; the restaurant delete below commits both
            removed = self.menus.delete_by_restaurant(id)

        self.repo.delete(id)
        if removed:
            logger.info("Restaurant menus removed", restaurant_id=id, count=removed)
        logger.info("Restaurant deleted", restaurant_id=id)
        return restaurant
