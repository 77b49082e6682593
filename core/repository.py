"""Repository pattern base class for database operations.

`BaseRepository` is the only way services touch the store. It exposes the
select / insert / update / delete operations plus an overlap predicate, and
converts every `SQLAlchemyError` into a `StoreError` carrying the store's
message verbatim. A failed write rolls the session back before raising.
"""

from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, StoreError
from core.logger import get_logger
from database.models import Base

logger = get_logger("core.repository")

T = TypeVar('T', bound=Base)


def overlaps(values: Optional[Iterable[str]], candidates: Optional[Iterable[str]]) -> bool:
    """Return True when the two collections share at least one element."""
    if not values or not candidates:
        return False
    return not set(values).isdisjoint(candidates)


class BaseRepository(Generic[T]):
    """Generic repository for common database operations.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    @property
    def table(self) -> str:
        return self.model.__tablename__

    def _store_error(self, operation: str, exc: SQLAlchemyError) -> StoreError:
        self.session.rollback()
        message = str(getattr(exc, "orig", None) or exc)
        logger.error("Store %s on %s failed: %s", operation, self.table, message)
        return StoreError(message, operation=operation, table=self.table)

    # reads

    def get(self, id: Any) -> Optional[T]:
        """Retrieve an object by its primary key, or None."""
        try:
            return self.session.get(self.model, id)
        except SQLAlchemyError as exc:
            raise self._store_error("select", exc) from exc

    def get_required(self, id: Any) -> T:
        """Retrieve an object by its primary key.

        Raises:
            NotFoundError: If no row has this key.
        """
        obj = self.get(id)
        if obj is None:
            raise NotFoundError(self.model.__name__, id)
        return obj

    def select(self, order_by=None, limit: Optional[int] = None, offset: int = 0, **filters) -> List[T]:
        """Return rows matching equality `filters`.

        Args:
            order_by: Column expression(s); defaults to primary key order.
            limit: Maximum number of rows to return.
            offset: Number of rows to skip.
            **filters: Column name to value equality filters.

        Returns:
            List of model instances.
        """
        try:
            query = self.session.query(self.model).filter_by(**filters)
            if order_by is None:
                order_by = (self.model.id,)
            elif not isinstance(order_by, (list, tuple)):
                order_by = (order_by,)
            query = query.order_by(*order_by)
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as exc:
            raise self._store_error("select", exc) from exc

    def first(self, order_by=None, **filters) -> Optional[T]:
        """Return the first row in `order_by` order, or None."""
        rows = self.select(order_by=order_by, limit=1, **filters)
        return rows[0] if rows else None

    def select_in(self, column: str, values: Iterable[Any]) -> List[T]:
        """Return rows whose `column` is one of `values`, in primary key order."""
        values = list(values)
        if not values:
            return []
        try:
            return (
                self.session.query(self.model)
                .filter(getattr(self.model, column).in_(values))
                .order_by(self.model.id)
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._store_error("select", exc) from exc

    def select_overlapping(self, column: str, values: Iterable[str], limit: Optional[int] = None, **filters) -> List[T]:
        """Return rows whose list-valued `column` shares an element with `values`.

        JSON columns have no portable overlap operator, so the predicate is
        evaluated over the filtered rows in primary key order.
        """
        wanted = set(values or ())
        matched = [row for row in self.select(**filters) if overlaps(getattr(row, column), wanted)]
        return matched[:limit] if limit is not None else matched

    def count(self, **filters) -> int:
        try:
            return self.session.query(self.model).filter_by(**filters).count()
        except SQLAlchemyError as exc:
            raise self._store_error("select", exc) from exc

    # writes

    def insert_one(self, obj: T) -> T:
        """Add, commit and refresh a new object."""
        return self.insert([obj])[0]

    def insert(self, objects: List[T]) -> List[T]:
        """Insert a batch of objects in a single commit.

        The batch is all-or-nothing: on failure the session is rolled back
        and a `StoreError` is raised.
        """
        try:
            self.session.add_all(objects)
            self.session.commit()
            for obj in objects:
                self.session.refresh(obj)
        except SQLAlchemyError as exc:
            raise self._store_error("insert", exc) from exc
        return objects

    def commit(self, obj: T, operation: str = "update") -> T:
        """Commit pending in-memory changes to `obj` and refresh it.

        On failure the session is rolled back and a `StoreError` raised; the
        caller decides how to restore its own view of `obj`.
        """
        try:
            self.session.commit()
            self.session.refresh(obj)
        except SQLAlchemyError as exc:
            raise self._store_error(operation, exc) from exc
        return obj

    def update(self, id: Any, patch: Dict[str, Any]) -> T:
        """Apply `patch` to the row with this key, commit and refresh.

        Raises:
            NotFoundError: If no row has this key.
            StoreError: If the commit fails.
        """
        obj = self.get_required(id)
        for key, value in patch.items():
            setattr(obj, key, value)
        return self.commit(obj)

    def delete(self, id: Any) -> None:
        """Delete the row with this key and commit. Deletion is terminal.

        Raises:
            NotFoundError: If no row has this key.
        """
        obj = self.get_required(id)
        try:
            self.session.delete(obj)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._store_error("delete", exc) from exc
