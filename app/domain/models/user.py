"""User domain model — maps to the 'users' table."""

from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func

from app.infrastructure.database import Base, new_object_id


class User(Base):
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=new_object_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(20), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt digest, never plaintext
    roles = Column(JSON, nullable=False, default=lambda: ["user"])
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @property
    def is_admin(self) -> bool:
        return "admin" in (self.roles or [])

    def __repr__(self):
        return f"<User {self.email}>"
