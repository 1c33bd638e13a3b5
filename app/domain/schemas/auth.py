"""Pydantic schemas for User and Auth."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserRead(BaseModel):
    """Outward view of a user. The password digest is never part of it."""

    id: str
    email: str
    username: str
    roles: List[str]
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    model_config = {"from_attributes": True}


class Principal(BaseModel):
    """The identity a verified bearer token speaks for."""

    id: str
    email: str
    username: str
    roles: List[str] = ["user"]

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles


class TokenResponse(BaseModel):
    message: str = "Login successful"
    token: str
    user: UserRead
