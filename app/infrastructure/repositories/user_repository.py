"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):

    def conflict_message(self, exc: IntegrityError) -> str:
        if "email" in str(exc.orig).lower():
            return "Email already in use"
        return "Username already in use"

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()
