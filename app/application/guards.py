"""
Authorization guards.

Pure checks over the principal bound to a request. Each returns the
principal it let through or raises; none of them hold state.
"""

from typing import Optional

import structlog
from pydantic import ValidationError

from app.application.services.auth_service import decode_access_token
from app.core.exceptions import BadRequestException, ForbiddenException, UnauthorizedException
from app.domain.schemas.auth import Principal

logger = structlog.get_logger(__name__)


def authenticate(token: Optional[str]) -> Principal:
    """Verify a bearer token and rebuild the principal it was issued for."""
    if not token:
        raise UnauthorizedException("No token provided")

    payload = decode_access_token(token)
    if payload is None:
        raise UnauthorizedException("Invalid or expired token")

    try:
        return Principal.model_validate(payload)
    except ValidationError:
        logger.warning("Token claims rejected", claims=sorted(payload))
        raise UnauthorizedException("Invalid or expired token")


def require_admin(principal: Optional[Principal]) -> Principal:
    if principal is None:
        raise BadRequestException("User not authenticated")

    if not principal.is_admin:
        logger.warning("Admin access denied", principal_id=principal.id)
        raise ForbiddenException("Access denied: admin only")

    return principal


def require_admin_or_self(principal: Optional[Principal], target_id: str) -> Principal:
    if principal is None:
        raise BadRequestException("User not authenticated")

    if principal.is_admin or principal.id == target_id:
        return principal

    logger.warning("Self-or-admin access denied", principal_id=principal.id, target_id=target_id)
    raise ForbiddenException("Access denied: admin or self only")
