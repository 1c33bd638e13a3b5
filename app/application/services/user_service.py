"""User service — registration, credential checks and account maintenance."""

from typing import Any, Dict, List, Optional, Sequence

import structlog

from app.application.services.auth_service import hash_password, verify_password
from app.application.services.base import check_id, check_page, check_sort
from app.core.exceptions import BadRequestException, EntityNotFoundException
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.common import SortField

logger = structlog.get_logger(__name__)

SORTABLE_FIELDS = ("email", "username")
DEFAULT_ROLES = ["user"]


class UserService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    def _ensure_unique(self, email: Optional[str], username: Optional[str], exclude_id: Optional[str] = None) -> None:
        # Email is reported before username when both collide
        if email is not None:
            existing = self.repo.get_by_email(email)
            if existing and existing.id != exclude_id:
                raise BadRequestException("Email already in use")
        if username is not None:
            existing = self.repo.get_by_username(username)
            if existing and existing.id != exclude_id:
                raise BadRequestException("Username already in use")

    def add(self, data: Dict[str, Any]) -> User:
        self._ensure_unique(data["email"], data["username"])

        user = self.repo.create(
            {
                "email": data["email"],
                "username": data["username"],
                "password": hash_password(data["password"]),
                "roles": list(data.get("roles") or DEFAULT_ROLES),
            }
        )
        logger.info("User registered", user_id=user.id, roles=user.roles)
        return user

    def get_all(self, sort: Sequence[SortField] = (), page: int = 1, limit: int = 10) -> List[User]:
        limit = check_page(page, limit)
        sort = check_sort(sort, SORTABLE_FIELDS)
        return self.repo.list(skip=(page - 1) * limit, limit=limit, sort=sort)

    def get_by_id(self, id: str) -> User:
        check_id(id, "user")
        user = self.repo.get_by_id(id)
        if not user:
            raise EntityNotFoundException("User not found")
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        return self.repo.get_by_email(email)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.repo.get_by_username(username)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """The user behind a credential pair, or None when either part is wrong."""
        user = self.repo.get_by_email(email)
        if not user or not verify_password(password, user.password):
            return None
        return user

    def update(self, id: str, patch: Dict[str, Any]) -> User:
        user = self.get_by_id(id)

        self._ensure_unique(patch.get("email"), patch.get("username"), exclude_id=user.id)

        changes = {
            field: patch[field]
            for field in ("email", "username", "roles")
            if patch.get(field) is not None
        }
        if patch.get("password") is not None:
            changes["password"] = hash_password(patch["password"])

        user = self.repo.update(user, changes)
        logger.info("User updated", user_id=user.id, fields=sorted(changes))
        return user

    def delete(self, id: str) -> User:
        check_id(id, "user")
        user = self.repo.delete(id)
        if not user:
            raise EntityNotFoundException("User not found")
        logger.info("User deleted", user_id=id)
        return user
