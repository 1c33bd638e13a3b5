"""Menu item domain model — maps to the 'menus' table."""

from sqlalchemy import Column, String, Float, Text, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.domain.models.restaurant import Restaurant  # noqa: F401  (relationship target)
from app.infrastructure.database import Base, new_object_id


class Menu(Base):
    __tablename__ = "menus"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "name", name="uq_menus_restaurant_name"),
    )

    id = Column(String(24), primary_key=True, default=new_object_id)
    # Plain reference, no FOREIGN KEY: a deleted restaurant may leave orphans
    restaurant_id = Column(String(24), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    category = Column(String(50), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    restaurant = relationship(
        "Restaurant",
        primaryjoin="foreign(Menu.restaurant_id) == Restaurant.id",
        viewonly=True,
        lazy="joined",
    )

    def __repr__(self):
        return f"<Menu {self.name} @ {self.restaurant_id}>"
