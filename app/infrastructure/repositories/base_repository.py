"""
SQLAlchemy implementation of the Base Repository.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestException
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.common import SortField
from app.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def conflict_message(self, exc: IntegrityError) -> str:
        """Message for a unique-index violation caught at commit time."""
        return "Duplicate value"

    def _commit(self, db_obj: ModelType) -> ModelType:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise BadRequestException(self.conflict_message(exc)) from exc
        self.db.refresh(db_obj)
        return db_obj

    def get_by_id(self, id: str) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def list(self, skip: int = 0, limit: int = 100, sort: Sequence[SortField] = ()) -> List[ModelType]:
        query = self.db.query(self.model)
        for item in sort:
            column = getattr(self.model, item.field)
            query = query.order_by(column.desc() if item.descending else column.asc())
        # id last so equal sort keys still page deterministically
        query = query.order_by(self.model.id.asc())
        return query.offset(skip).limit(limit).all()

    def create(self, obj_in: Dict[str, Any]) -> ModelType:
        db_obj = self.model(**obj_in)
        self.db.add(db_obj)
        return self._commit(db_obj)

    def update(self, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        self.db.add(db_obj)
        return self._commit(db_obj)

    def delete(self, id: str) -> Optional[ModelType]:
        obj = self.db.get(self.model, id)
        if obj:
            self.db.delete(obj)
            self.db.commit()
        return obj
