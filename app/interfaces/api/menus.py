"""Menu API routes — public reads, admin-only writes."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from app.application.services.menu_service import MenuService
from app.domain.models.menu import Menu
from app.domain.schemas.menu import MenuRead
from app.interfaces.api.deps import (
    RequestContext,
    admin_required,
    menu_creation,
    menu_update,
)
from app.interfaces.api.query import parse_menu_sort, parse_pagination
from app.interfaces.deps import get_menu_service

router = APIRouter(prefix="/api/menus", tags=["Menus"])


def menu_view(menu: Menu) -> Dict[str, Any]:
    return MenuRead.model_validate(menu).model_dump(mode="json", by_alias=True)


@router.get("")
def list_menus(
    sort: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: MenuService = Depends(get_menu_service),
):
    """List menu items. `sort=category:asc,price:desc`; unknown fields are rejected."""
    sort_fields = parse_menu_sort(sort)
    page_number, page_size = parse_pagination(page, limit)
    return [menu_view(m) for m in service.get_all(sort_fields, page_number, page_size)]


@router.get("/by-restaurant/{restaurant_id}")
def list_menus_by_restaurant(
    restaurant_id: str,
    service: MenuService = Depends(get_menu_service),
):
    return [menu_view(m) for m in service.get_menus_by_restaurant(restaurant_id)]


@router.get("/{id}")
def get_menu(id: str, service: MenuService = Depends(get_menu_service)):
    return menu_view(service.get_by_id(id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_menu(
    payload: Dict[str, Any] = Depends(menu_creation),
    ctx: RequestContext = Depends(admin_required),
    service: MenuService = Depends(get_menu_service),
):
    menu = service.add(payload)
    return {"message": "Menu created successfully", "menu": menu_view(menu)}


@router.put("/{id}")
def update_menu(
    id: str,
    payload: Dict[str, Any] = Depends(menu_update),
    ctx: RequestContext = Depends(admin_required),
    service: MenuService = Depends(get_menu_service),
):
    menu = service.update(id, payload)
    return {"message": "Menu updated successfully", "menu": menu_view(menu)}


@router.delete("/{id}")
def delete_menu(
    id: str,
    ctx: RequestContext = Depends(admin_required),
    service: MenuService = Depends(get_menu_service),
):
    menu = service.delete(id)
    return {"message": "Menu deleted successfully", "menu": menu_view(menu)}
