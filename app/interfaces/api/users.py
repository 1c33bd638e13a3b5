"""User API routes — registration, login and account management."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from app.application.services.auth_service import create_user_token
from app.application.services.user_service import UserService
from app.core.exceptions import ForbiddenException, UnauthorizedException
from app.domain.models.user import User
from app.domain.schemas.auth import TokenResponse, UserRead
from app.interfaces.api.deps import (
    RequestContext,
    admin_or_self_required,
    admin_required,
    get_request_context,
    user_login,
    user_registration,
    user_update,
)
from app.interfaces.api.query import parse_pagination
from app.interfaces.deps import get_user_service

router = APIRouter(prefix="/api/users", tags=["Users"])


def user_view(user: User) -> Dict[str, Any]:
    return UserRead.model_validate(user).model_dump(mode="json", by_alias=True)


@router.post("", status_code=status.HTTP_201_CREATED)
def register(
    payload: Dict[str, Any] = Depends(user_registration),
    ctx: RequestContext = Depends(get_request_context),
    service: UserService = Depends(get_user_service),
):
    data = dict(payload)
    # Self-service sign-ups are always plain users
    if not ctx.is_admin:
        data.pop("roles", None)

    user = service.add(data)
    return {"message": "User created successfully", "user": user_view(user)}


@router.post("/login")
def login(
    payload: Dict[str, Any] = Depends(user_login),
    service: UserService = Depends(get_user_service),
):
    user = service.authenticate(payload["email"], payload["password"])
    if not user:
        # Same answer for an unknown email and a wrong password
        raise UnauthorizedException("Invalid email or password")

    response = TokenResponse(token=create_user_token(user), user=UserRead.model_validate(user))
    return response.model_dump(mode="json", by_alias=True)


@router.get("")
def list_users(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    ctx: RequestContext = Depends(admin_required),
    service: UserService = Depends(get_user_service),
):
    page_number, page_size = parse_pagination(page, limit)
    return [user_view(u) for u in service.get_all(page=page_number, limit=page_size)]


@router.get("/{id}")
def get_user(
    id: str,
    ctx: RequestContext = Depends(admin_or_self_required),
    service: UserService = Depends(get_user_service),
):
    return user_view(service.get_by_id(id))


@router.put("/{id}")
def update_user(
    id: str,
    payload: Dict[str, Any] = Depends(user_update),
    ctx: RequestContext = Depends(admin_or_self_required),
    service: UserService = Depends(get_user_service),
):
    if payload.get("roles") is not None and not ctx.is_admin:
        raise ForbiddenException("Only admins can change roles")

    user = service.update(id, payload)
    return {"message": "User updated successfully", "user": user_view(user)}


@router.delete("/{id}")
def delete_user(
    id: str,
    ctx: RequestContext = Depends(admin_or_self_required),
    service: UserService = Depends(get_user_service),
):
    user = service.delete(id)
    return {"message": "User deleted successfully", "user": user_view(user)}
