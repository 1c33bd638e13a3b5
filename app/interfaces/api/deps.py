"""FastAPI dependencies — request context, auth guards and payload validation."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from fastapi import Body, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application import validators
from app.application.guards import authenticate, require_admin, require_admin_or_self
from app.core.exceptions import UnauthorizedException
from app.domain.schemas.auth import Principal

security = HTTPBearer(auto_error=False)


@dataclass
class RequestContext:
    """What downstream guards and controllers know about the caller."""

    principal: Optional[Principal] = None

    @property
    def is_admin(self) -> bool:
        return self.principal is not None and self.principal.is_admin


def get_request_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> RequestContext:
    """Caller identity for public routes; a missing or unverifiable token means anonymous."""
    if credentials is None:
        return RequestContext()
    try:
        return RequestContext(principal=authenticate(credentials.credentials))
    except UnauthorizedException:
        return RequestContext()


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> RequestContext:
    token = credentials.credentials if credentials else None
    return RequestContext(principal=authenticate(token))


def admin_required(ctx: RequestContext = Depends(get_current_principal)) -> RequestContext:
    require_admin(ctx.principal)
    return ctx


def admin_or_self_required(
    id: str,
    ctx: RequestContext = Depends(get_current_principal),
) -> RequestContext:
    require_admin_or_self(ctx.principal, id)
    return ctx


def json_body(request: Request, payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    payload = payload or {}
    # Echoed back by the error handlers outside production
    request.state.body = payload
    return payload


def validated(validator: Callable[[Dict[str, Any]], None]):
    """Dependency running `validator` on the JSON body before anything else."""

    def dependency(payload: Dict[str, Any] = Depends(json_body)) -> Dict[str, Any]:
        validator(payload)
        return payload

    dependency.__name__ = validator.__name__
    return dependency


user_registration = validated(validators.validate_user_registration)
user_login = validated(validators.validate_user_login)
user_update = validated(validators.validate_user_update)
restaurant_creation = validated(validators.validate_restaurant_creation)
restaurant_update = validated(validators.validate_restaurant_update)
menu_creation = validated(validators.validate_menu_creation)
menu_update = validated(validators.validate_menu_update)
