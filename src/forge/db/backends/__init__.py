"""Storage backends for Forge records.

The application never talks to a database directly: every page view goes
through a ``Backend``, which is either the hosted backend-as-a-service
(Supabase) or a local SQLite file.

Usage:
    # SQLite (development, tests)
    from forge.db.backends import SQLiteBackend
    backend = SQLiteBackend(db_path="forge.db")

    # Supabase (production)
    from forge.db.backends import SupabaseBackend
    backend = SupabaseBackend(url=SUPABASE_URL, key=SUPABASE_SERVICE_KEY)

    habits = backend.select("habits", eq={"user_id": user_id})
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence


Row = Dict[str, Any]


class Backend(ABC):
    """Abstract base class for record storage.

    Each operation targets one table. ``eq`` filters are exact matches,
    ``gte`` filters are inclusive lower bounds. Rows come back as plain
    dicts with ``id`` and ``created_at`` filled in by the backend.

    Ownership is not implicit: callers always pass ``user_id`` in ``eq``.
    """

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the backend (create schema or verify connectivity)."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release any held connection or client."""
        pass

    @abstractmethod
    def select(
        self,
        table: str,
        eq: Optional[Dict[str, Any]] = None,
        gte: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """
        Fetch rows matching the filters.

        Args:
            table: Table name
            eq: Column -> value exact matches
            gte: Column -> value inclusive lower bounds
            order_by: Column to sort by (defaults to created_at)
            descending: Sort direction
            limit: Maximum number of rows

        Returns:
            List of rows
        """
        pass

    @abstractmethod
    def insert(self, table: str, record: Row) -> Row:
        """Insert a row and return it as stored."""
        pass

    @abstractmethod
    def insert_many(self, table: str, records: Sequence[Row]) -> List[Row]:
        """Insert several rows in one statement; either all or none are stored."""
        pass

    @abstractmethod
    def update(
        self,
        table: str,
        record_id: str,
        partial: Row,
        eq: Optional[Dict[str, Any]] = None,
    ) -> Optional[Row]:
        """Overwrite the given fields of one row; None if no row matched."""
        pass

    @abstractmethod
    def delete(
        self,
        table: str,
        record_id: str,
        eq: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Delete one row by ID; False if no row matched."""
        pass

    @abstractmethod
    def delete_where(self, table: str, eq: Dict[str, Any]) -> int:
        """Delete every row matching ``eq``; returns the number removed."""
        pass

    @abstractmethod
    def toggle(self, table: str, match: Dict[str, Any], record: Row) -> bool:
        """
        Atomically remove the row matching ``match`` or insert ``record``.

        Returns:
            True if the row exists afterwards, False if it was removed
        """
        pass

    @abstractmethod
    def insert_ignore(
        self,
        table: str,
        record: Row,
        conflict_columns: Sequence[str],
    ) -> bool:
        """Insert unless a row with the same conflict columns exists; True if inserted."""
        pass

    @abstractmethod
    def health_check(self) -> Dict[str, Any]:
        """Check backend connectivity.

        Returns:
            Dict with:
                - healthy: bool
                - backend: str (sqlite, supabase)
                - latency_ms: float
                - details: Any additional info
        """
        pass


from .sqlite_backend import SQLiteBackend  # noqa: E402
from .supabase_backend import SupabaseBackend  # noqa: E402

__all__ = [
    "Backend",
    "Row",
    "SQLiteBackend",
    "SupabaseBackend",
]
