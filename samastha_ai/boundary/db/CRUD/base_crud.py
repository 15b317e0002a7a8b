"""
Generic row access shared by the knowledge store CRUD classes.

Every table keyed by a public string `id`; tables that also carry an
autoincrement `pk` list in insertion order by it. Methods flush but never
commit: the KnowledgeStore owns the session and the transaction.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from samastha_ai.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Single-table operations parameterized by the ORM model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def create(self, session: Session, **values) -> ModelT:
        """Insert one row and flush so defaults are populated."""
        row = self.model(**values)
        session.add(row)
        session.flush()
        return row

    def get_by_id(self, session: Session, id: Any) -> ModelT | None:
        return session.execute(select(self.model).where(self.model.id == id)).scalar_one_or_none()

    def get_all(self, session: Session) -> Sequence[ModelT]:
        """All rows, oldest first."""
        ordering = getattr(self.model, "pk", self.model.id)
        return session.execute(select(self.model).order_by(ordering)).scalars().all()

    def update_by_id(self, session: Session, id: Any, **values) -> bool:
        """
        Apply a column update in place.

        Returns:
            False when no row carries that id
        """
        result = session.execute(update(self.model).where(self.model.id == id).values(**values))
        return result.rowcount > 0

    def exists(self, session: Session, id: Any) -> bool:
        found = session.execute(select(self.model.id).where(self.model.id == id)).first()
        return found is not None

    def count(self, session: Session) -> int:
        return session.execute(select(func.count()).select_from(self.model)).scalar_one()
