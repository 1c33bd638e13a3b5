"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.application.services.menu_service import MenuService
from app.application.services.restaurant_service import RestaurantService
from app.application.services.user_service import UserService
from app.domain.models.menu import Menu
from app.domain.models.restaurant import Restaurant
from app.domain.models.user import User
from app.infrastructure.database import get_db
from app.infrastructure.repositories.menu_repository import SQLAlchemyMenuRepository
from app.infrastructure.repositories.restaurant_repository import SQLAlchemyRestaurantRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Get user service instance."""
    return UserService(SQLAlchemyUserRepository(db, User))


def get_restaurant_service(db: Session = Depends(get_db)) -> RestaurantService:
    """Get restaurant service instance."""
    return RestaurantService(
        SQLAlchemyRestaurantRepository(db, Restaurant),
        menus=SQLAlchemyMenuRepository(db, Menu),
    )


def get_menu_service(
    db: Session = Depends(get_db),
    restaurants: RestaurantService = Depends(get_restaurant_service),
) -> MenuService:
    """Get menu service instance."""
    return MenuService(SQLAlchemyMenuRepository(db, Menu), restaurants)
