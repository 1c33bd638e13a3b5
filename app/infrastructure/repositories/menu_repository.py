"""
SQLAlchemy Implementation of Menu Repository.
"""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.domain.models.menu import Menu
from app.domain.repositories.menu_repository import MenuRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyMenuRepository(SQLAlchemyRepository[Menu], MenuRepository):

    def conflict_message(self, exc: IntegrityError) -> str:
        return "A menu with this name already exists for this restaurant"

    def get_by_restaurant_and_name(self, restaurant_id: str, name: str) -> Optional[Menu]:
        return (
            self.db.query(Menu)
            .filter(Menu.restaurant_id == restaurant_id, Menu.name == name)
            .first()
        )

    def list_by_restaurant(self, restaurant_id: str) -> List[Menu]:
        return (
            self.db.query(Menu)
            .filter(Menu.restaurant_id == restaurant_id)
            .order_by(Menu.created_at.asc(), Menu.id.asc())
            .all()
        )

    def delete_by_restaurant(self, restaurant_id: str) -> int:
        count = (
            self.db.query(Menu)
            .filter(Menu.restaurant_id == restaurant_id)
            .delete(synchronize_session=False)
        )
        return count
