"""Restaurant domain model — maps to the 'restaurants' table."""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from app.infrastructure.database import Base, new_object_id


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(String(24), primary_key=True, default=new_object_id)
    name = Column(String(100), unique=True, nullable=False, index=True)
    address = Column(String(200), nullable=False)
    phone = Column(String(16), nullable=False)
    opening_hours = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Restaurant {self.name}>"
