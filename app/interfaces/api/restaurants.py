"""Restaurant API routes — public reads, admin-only writes."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from app.application.services.restaurant_service import RestaurantService
from app.domain.models.restaurant import Restaurant
from app.domain.schemas.restaurant import RestaurantRead
from app.interfaces.api.deps import (
    RequestContext,
    admin_required,
    restaurant_creation,
    restaurant_update,
)
from app.interfaces.api.query import parse_pagination, parse_restaurant_sort
from app.interfaces.deps import get_restaurant_service

router = APIRouter(prefix="/api/restaurants", tags=["Restaurants"])


def restaurant_view(restaurant: Restaurant) -> Dict[str, Any]:
    return RestaurantRead.model_validate(restaurant).model_dump(mode="json", by_alias=True)


@router.get("")
def list_restaurants(
    sort: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: RestaurantService = Depends(get_restaurant_service),
):
    """List restaurants. `sort=name` or `sort=-name`; unknown fields are ignored."""
    page_number, page_size = parse_pagination(page, limit)
    restaurants = service.get_all(parse_restaurant_sort(sort), page_number, page_size)
    return [restaurant_view(r) for r in restaurants]


@router.get("/{id}")
def get_restaurant(id: str, service: RestaurantService = Depends(get_restaurant_service)):
    return restaurant_view(service.get_by_id(id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_restaurant(
    payload: Dict[str, Any] = Depends(restaurant_creation),
    ctx: RequestContext = Depends(admin_required),
    service: RestaurantService = Depends(get_restaurant_service),
):
    restaurant = service.add(payload)
    return {"message": "Restaurant created successfully", "restaurant": restaurant_view(restaurant)}


@router.put("/{id}")
def update_restaurant(
    id: str,
    payload: Dict[str, Any] = Depends(restaurant_update),
    ctx: RequestContext = Depends(admin_required),
    service: RestaurantService = Depends(get_restaurant_service),
):
    restaurant = service.update(id, payload)
    return {"message": "Restaurant updated successfully", "restaurant": restaurant_view(restaurant)}


@router.delete("/{id}")
def delete_restaurant(
    id: str,
    ctx: RequestContext = Depends(admin_required),
    service: RestaurantService = Depends(get_restaurant_service),
):
    restaurant = service.delete(id)
    return {"message": "Restaurant deleted successfully", "restaurant": restaurant_view(restaurant)}
