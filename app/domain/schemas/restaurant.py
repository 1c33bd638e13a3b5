"""Pydantic schemas for Restaurant domain."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RestaurantRead(BaseModel):
    id: str
    name: str
    address: str
    phone: str
    opening_hours: str
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    model_config = {"from_attributes": True}
