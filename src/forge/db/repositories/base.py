"""Base repository for user-owned records.

Repositories wrap a ``Backend`` table and convert rows into pydantic models.
Every operation takes the owning ``user_id`` and passes it as a filter, so
one user's rows are never visible to another.
"""

from typing import Any, ClassVar, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from ..backends import Backend, Row

T = TypeVar("T", bound=BaseModel)


class UserScopedRepository(Generic[T]):
    """
    CRUD over one table, scoped by owner.

    Type Parameters:
        T: The pydantic model rows are converted to

    Subclasses set ``table``, ``model`` and optionally the default ordering.
    """

    table: ClassVar[str]
    model: ClassVar[Type[BaseModel]]
    order_by: ClassVar[str] = "created_at"
    descending: ClassVar[bool] = False

    def __init__(self, backend: Backend):
        self.backend = backend

    def _to_model(self, row: Row) -> T:
        return self.model.model_validate(row)

    def list(
        self,
        user_id: str,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> List[T]:
        """
        Get all of the user's rows in the default order.

        Args:
            user_id: Owner
            limit: Maximum number of rows
            **filters: Extra exact-match filters

        Returns:
            List of models
        """
        rows = self.backend.select(
            self.table,
            eq={**filters, "user_id": user_id},
            order_by=self.order_by,
            descending=self.descending,
            limit=limit,
        )
        return [self._to_model(r) for r in rows]

    def get(self, user_id: str, record_id: str) -> Optional[T]:
        """Get one row by ID, or None if it does not exist for this user."""
        rows = self.backend.select(
            self.table, eq={"user_id": user_id, "id": record_id}, limit=1
        )
        return self._to_model(rows[0]) if rows else None

    def create(self, user_id: str, data: Dict[str, Any]) -> T:
        row = self.backend.insert(self.table, {**data, "user_id": user_id})
        return self._to_model(row)

    def update(self, user_id: str, record_id: str, partial: Dict[str, Any]) -> Optional[T]:
        """Overwrite the given fields; None if the row does not exist for this user."""
        row = self.backend.update(
            self.table, record_id, partial, eq={"user_id": user_id}
        )
        return self._to_model(row) if row else None

    def delete(self, user_id: str, record_id: str) -> bool:
        return self.backend.delete(self.table, record_id, eq={"user_id": user_id})
