"""
SQLAlchemy Implementation of Restaurant Repository.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from app.domain.models.restaurant import Restaurant
from app.domain.repositories.restaurant_repository import RestaurantRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyRestaurantRepository(SQLAlchemyRepository[Restaurant], RestaurantRepository):

    def conflict_message(self, exc: IntegrityError) -> str:
        return "Name for this restaurant is already in use"

    def get_by_name(self, name: str) -> Optional[Restaurant]:
        return self.db.query(Restaurant).filter(Restaurant.name == name).first()
