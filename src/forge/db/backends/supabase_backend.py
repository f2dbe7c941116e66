"""Supabase backend implementation.

Production storage. Tables mirror the SQLite schema with native types
(UUID ids, DATE, BOOLEAN, TIMESTAMPTZ ``created_at`` defaults).

Supabase-Specific Considerations:
    - The service key bypasses Row-Level Security, so every call still
      filters on ``user_id`` explicitly
    - The REST API has no multi-statement transactions; ``toggle`` relies on
      the UNIQUE(user_id, habit_id, date) constraint and an
      ``ON CONFLICT DO NOTHING`` upsert instead
    - ``insert_many`` sends one bulk INSERT, which PostgreSQL applies
      atomically
"""

import logging
import time
from typing import Any, Dict, List, Optional, Sequence

from postgrest.exceptions import APIError
from supabase import Client, create_client

from ...exceptions import BackendError, BackendNotConfiguredError
from . import Backend, Row


logger = logging.getLogger(__name__)


class SupabaseBackend(Backend):
    """Supabase/PostgreSQL implementation of the Backend interface.

    Usage:
        backend = SupabaseBackend(
            url="https://xxx.supabase.co",
            key="your-service-key"
        )
        workouts = backend.select(
            "workouts", eq={"user_id": user_id}, order_by="date", descending=True
        )
    """

    def __init__(self, url: Optional[str], key: Optional[str]):
        if not url or not key:
            raise BackendNotConfiguredError(
                "Supabase URL and service key are required. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_KEY."
            )
        self.url = url
        self.key = key
        self._client: Optional[Client] = None

    @property
    def client(self) -> Client:
        """Lazy-initialize Supabase client."""
        if self._client is None:
            self._client = create_client(self.url, self.key)
        return self._client

    def initialize(self) -> None:
        """Verify the connection works.

        Schema is managed through Supabase migrations, not created here.
        """
        self._execute(
            self.client.table("habits").select("id").limit(1),
            operation="initialize",
            table="habits",
        )
        logger.info(f"Connected to Supabase at {self.url}")

    def close(self) -> None:
        self._client = None

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _execute(query, operation: str, table: str) -> List[Row]:
        try:
            result = query.execute()
        except APIError as e:
            logger.warning(f"Supabase {operation} on {table} failed: {e.message}")
            raise BackendError(
                e.message or str(e), operation=operation, table=table
            ) from e
        return result.data or []

    @staticmethod
    def _filter(query, eq: Optional[Dict[str, Any]] = None, gte: Optional[Dict[str, Any]] = None):
        for column, value in (eq or {}).items():
            if value is None:
                query = query.is_(column, "null")
            else:
                query = query.eq(column, value)
        for column, value in (gte or {}).items():
            query = query.gte(column, value)
        return query

    # =========================================================================
    # Backend interface
    # =========================================================================

    def select(
        self,
        table: str,
        eq: Optional[Dict[str, Any]] = None,
        gte: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        query = self._filter(self.client.table(table).select("*"), eq, gte)
        query = query.order(order_by or "created_at", desc=descending, nullsfirst=False)
        if order_by and order_by != "created_at":
            query = query.order("created_at")
        if limit is not None:
            query = query.limit(limit)
        return self._execute(query, "select", table)

    def insert(self, table: str, record: Row) -> Row:
        rows = self._execute(self.client.table(table).insert(record), "insert", table)
        if not rows:
            raise BackendError("Insert returned no row", operation="insert", table=table)
        return rows[0]

    def insert_many(self, table: str, records: Sequence[Row]) -> List[Row]:
        if not records:
            return []
        return self._execute(
            self.client.table(table).insert(list(records)), "insert", table
        )

    def update(
        self,
        table: str,
        record_id: str,
        partial: Row,
        eq: Optional[Dict[str, Any]] = None,
    ) -> Optional[Row]:
        if not partial:
            rows = self.select(table, eq={**(eq or {}), "id": record_id}, limit=1)
            return rows[0] if rows else None

        query = self._filter(
            self.client.table(table).update(partial), {**(eq or {}), "id": record_id}
        )
        rows = self._execute(query, "update", table)
        return rows[0] if rows else None

    def delete(
        self,
        table: str,
        record_id: str,
        eq: Optional[Dict[str, Any]] = None,
    ) -> bool:
        return self.delete_where(table, {**(eq or {}), "id": record_id}) > 0

    def delete_where(self, table: str, eq: Dict[str, Any]) -> int:
        if not eq:
            raise BackendError("Refusing to delete without a filter", operation="delete", table=table)
        query = self._filter(self.client.table(table).delete(), eq)
        return len(self._execute(query, "delete", table))

    def toggle(self, table: str, match: Dict[str, Any], record: Row) -> bool:
        if self.delete_where(table, match) > 0:
            return False
        self.insert_ignore(table, {**record, **match}, list(match))
        return True

    def insert_ignore(
        self,
        table: str,
        record: Row,
        conflict_columns: Sequence[str],
    ) -> bool:
        query = self.client.table(table).upsert(
            record,
            on_conflict=",".join(conflict_columns),
            ignore_duplicates=True,
        )
        # Ignored duplicates are not returned
        return len(self._execute(query, "upsert", table)) > 0

    def health_check(self) -> Dict[str, Any]:
        """Check database health and connectivity."""
        start_time = time.time()
        try:
            self._execute(
                self.client.table("habits").select("id").limit(1),
                operation="health_check",
                table="habits",
            )
            latency_ms = (time.time() - start_time) * 1000
            return {
                "healthy": True,
                "backend": "supabase",
                "latency_ms": round(latency_ms, 2),
                "details": {"url": self.url},
            }
        except BackendError as e:
            latency_ms = (time.time() - start_time) * 1000
            return {
                "healthy": False,
                "backend": "supabase",
                "latency_ms": round(latency_ms, 2),
                "details": {"error": e.message, "url": self.url},
            }
