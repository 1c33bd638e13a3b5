"""Menu service — menu items and their per-restaurant name uniqueness."""

from typing import Any, Dict, List, Optional, Sequence

import structlog

from app.application.services.base import check_id, check_page, check_sort
from app.application.services.restaurant_service import RestaurantService
from app.application.validators import parse_price
from app.core.exceptions import BadRequestException, EntityNotFoundException
from app.domain.models.menu import Menu
from app.domain.repositories.menu_repository import MenuRepository
from app.domain.schemas.common import SortField

logger = structlog.get_logger(__name__)

SORTABLE_FIELDS = ("category", "price")


class MenuService:
    def __init__(self, repo: MenuRepository, restaurants: RestaurantService):
        self.repo = repo
        self.restaurants = restaurants

    def _ensure_restaurant(self, restaurant_id: str) -> None:
        check_id(restaurant_id, "restaurant")
        # Not atomic with the insert that follows; the unique index is the backstop
        # for names, but a restaurant deleted in between leaves an orphan.
        if not self.restaurants.exists(restaurant_id):
            raise BadRequestException("Restaurant does not exist")

    def _ensure_unique_name(self, restaurant_id: str, name: str, exclude_id: Optional[str] = None) -> None:
        existing = self.repo.get_by_restaurant_and_name(restaurant_id, name)
        if existing and existing.id != exclude_id:
            raise BadRequestException("A menu with this name already exists for this restaurant")

    def add(self, data: Dict[str, Any]) -> Menu:
        restaurant_id = data["restaurantId"]
        self._ensure_restaurant(restaurant_id)
        self._ensure_unique_name(restaurant_id, data["name"])

        values = {
            "name": data["name"],
            "price": parse_price(data["price"]),
            "restaurant_id": restaurant_id,
        }
        if data.get("description"):
            values["description"] = data["description"]
        if data.get("category"):
            values["category"] = data["category"]

        menu = self.repo.create(values)
        logger.info("Menu created", menu_id=menu.id, restaurant_id=restaurant_id)
        return menu

    def get_all(self, sort: Sequence[SortField] = (), page: int = 1, limit: int = 10) -> List[Menu]:
        limit = check_page(page, limit)
        sort = check_sort(sort, SORTABLE_FIELDS)
        return self.repo.list(skip=(page - 1) * limit, limit=limit, sort=sort)

    def get_by_id(self, id: str) -> Menu:
        check_id(id, "menu")
        menu = self.repo.get_by_id(id)
        if not menu:
            raise EntityNotFoundException("Menu not found")
        return menu

    def find_by_restaurant_and_name(self, restaurant_id: str, name: str) -> Optional[Menu]:
        return self.repo.get_by_restaurant_and_name(restaurant_id, name)

    def get_menus_by_restaurant(self, restaurant_id: str) -> List[Menu]:
        check_id(restaurant_id, "restaurant")
        return self.repo.list_by_restaurant(restaurant_id)

    def update(self, id: str, patch: Dict[str, Any]) -> Menu:
        menu = self.get_by_id(id)

        new_restaurant_id = patch.get("restaurantId")
        if new_restaurant_id and new_restaurant_id != menu.restaurant_id:
            self._ensure_restaurant(new_restaurant_id)

        target_restaurant_id = new_restaurant_id or menu.restaurant_id
        if patch.get("name"):
            self._ensure_unique_name(target_restaurant_id, patch["name"], exclude_id=menu.id)
        elif new_restaurant_id:
            # Moving keeps the current name, which must be free at the destination
            self._ensure_unique_name(target_restaurant_id, menu.name, exclude_id=menu.id)

        changes: Dict[str, Any] = {}
        for field in ("name", "description", "category"):
            if patch.get(field):
                changes[field] = patch[field]
        if patch.get("price") is not None:
            changes["price"] = parse_price(patch["price"])
        if new_restaurant_id:
            changes["restaurant_id"] = new_restaurant_id

        menu = self.repo.update(menu, changes)
        logger.info("Menu updated", menu_id=menu.id, fields=sorted(changes))
        return menu

    def delete(self, id: str) -> Menu:
        check_id(id, "menu")
        menu = self.repo.delete(id)
        if not menu:
            raise EntityNotFoundException("Menu not found")
        logger.info("Menu deleted", menu_id=id)
        return menu
