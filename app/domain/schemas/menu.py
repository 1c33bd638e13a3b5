"""Pydantic schemas for Menu domain."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.schemas.restaurant import RestaurantRead


class MenuRead(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: float
    category: Optional[str] = None
    restaurant_id: str = Field(serialization_alias="restaurantId")
    # Embedded when the referenced restaurant still exists
    restaurant: Optional[RestaurantRead] = None
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    model_config = {"from_attributes": True}
