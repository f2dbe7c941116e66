"""SQLite backend implementation.

Local stand-in for the hosted backend, used in development and tests.

SQLite-Specific Considerations:
    - IDs are UUID4 strings generated on insert
    - Dates are stored as TEXT in ISO format (YYYY-MM-DD)
    - Booleans are stored as INTEGER (0/1) and converted back on read
    - Foreign keys (and their ON DELETE CASCADE) need PRAGMA foreign_keys=ON
    - Single-writer model; toggles take the write lock up front
"""

import logging
import sqlite3
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ...exceptions import BackendError, ConflictError
from ..schema import BOOLEAN_COLUMNS, SCHEMA, TABLE_COLUMNS
from . import Backend, Row


logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteBackend(Backend):
    """SQLite implementation of the Backend interface.

    Usage:
        backend = SQLiteBackend(db_path="forge.db")
        backend.initialize()

        todos = backend.select(
            "todos", eq={"user_id": "user-123"}, order_by="due_date"
        )
    """

    def __init__(self, db_path: str | Path):
        """Initialize SQLite backend.

        Args:
            db_path: Path to the SQLite database file. Nothing is opened
                     until the first query.
        """
        self.db_path = Path(db_path)

    def initialize(self) -> None:
        """Create the schema if it does not exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._get_connection() as conn:
            conn.executescript(SCHEMA)
        logger.info(f"SQLite backend ready at {self.db_path}")

    def close(self) -> None:
        """Connections are per-call; nothing to release."""
        pass

    @contextmanager
    def _get_connection(self):
        """Get a database connection that commits on success."""
        conn = sqlite3.connect(str(self.db_path), check_same_thread=False, timeout=10)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys=ON")
        conn.execute("PRAGMA journal_mode=WAL")

        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise ConflictError(f"Constraint violated: {e}") from e
        except sqlite3.Error as e:
            conn.rollback()
            raise BackendError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _check_columns(table: str, columns: Iterable[str]) -> None:
        allowed = TABLE_COLUMNS.get(table)
        if allowed is None:
            raise BackendError(f"Unknown table: {table}", table=table)
        unknown = [c for c in columns if c not in allowed]
        if unknown:
            raise BackendError(
                f"Unknown column(s) for {table}: {', '.join(sorted(unknown))}",
                table=table,
            )

    @staticmethod
    def _to_row(row: sqlite3.Row) -> Row:
        data = dict(row)
        for column in BOOLEAN_COLUMNS & data.keys():
            if data[column] is not None:
                data[column] = bool(data[column])
        return data

    def _where(
        self,
        table: str,
        eq: Optional[Dict[str, Any]] = None,
        gte: Optional[Dict[str, Any]] = None,
    ) -> Tuple[str, List[Any]]:
        eq = eq or {}
        gte = gte or {}
        self._check_columns(table, list(eq) + list(gte))

        clauses = []
        params: List[Any] = []
        for column, value in eq.items():
            if value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column} = ?")
                params.append(value)
        for column, value in gte.items():
            clauses.append(f"{column} >= ?")
            params.append(value)

        sql = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        return sql, params

    def _prepare(self, table: str, record: Row) -> Row:
        data = dict(record)
        data.setdefault("id", str(uuid.uuid4()))
        data.setdefault("created_at", _now_iso())
        self._check_columns(table, data)
        return data

    @staticmethod
    def _insert_sql(table: str, data: Row, verb: str = "INSERT") -> str:
        columns = ", ".join(data)
        placeholders = ", ".join("?" for _ in data)
        return f"{verb} INTO {table} ({columns}) VALUES ({placeholders})"

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
        where, params = self._where(table, eq, gte)
        order_column = order_by or "created_at"
        self._check_columns(table, [order_column])

        direction = "DESC" if descending else "ASC"
        # NULLs last regardless of direction, created_at breaks ties
        sql = (
            f"SELECT * FROM {table}{where} "
            f"ORDER BY {order_column} IS NULL, {order_column} {direction}, created_at ASC"
        )
        if limit is not None:
            sql += " LIMIT ?"
            params.append(int(limit))

        with self._get_connection() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._to_row(r) for r in rows]

    def insert(self, table: str, record: Row) -> Row:
        data = self._prepare(table, record)
        with self._get_connection() as conn:
            conn.execute(self._insert_sql(table, data), list(data.values()))
            row = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (data["id"],)).fetchone()
        return self._to_row(row)

    def insert_many(self, table: str, records: Sequence[Row]) -> List[Row]:
        if not records:
            return []
        prepared = [self._prepare(table, r) for r in records]
        with self._get_connection() as conn:
            for data in prepared:
                conn.execute(self._insert_sql(table, data), list(data.values()))
            placeholders = ", ".join("?" for _ in prepared)
            rows = conn.execute(
                f"SELECT * FROM {table} WHERE id IN ({placeholders}) ORDER BY created_at",
                [d["id"] for d in prepared],
            ).fetchall()
        return [self._to_row(r) for r in rows]

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

        self._check_columns(table, partial)
        where, params = self._where(table, {**(eq or {}), "id": record_id})
        assignments = ", ".join(f"{column} = ?" for column in partial)

        with self._get_connection() as conn:
            cursor = conn.execute(
                f"UPDATE {table} SET {assignments}{where}",
                list(partial.values()) + params,
            )
            if cursor.rowcount == 0:
                return None
            row = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (record_id,)).fetchone()
        return self._to_row(row)

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
        where, params = self._where(table, eq)
        with self._get_connection() as conn:
            cursor = conn.execute(f"DELETE FROM {table}{where}", params)
            return cursor.rowcount

    def toggle(self, table: str, match: Dict[str, Any], record: Row) -> bool:
        where, params = self._where(table, match)
        data = self._prepare(table, {**record, **match})

        with self._get_connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            cursor = conn.execute(f"DELETE FROM {table}{where}", params)
            if cursor.rowcount > 0:
                return False
            conn.execute(self._insert_sql(table, data), list(data.values()))
            return True

    def insert_ignore(
        self,
        table: str,
        record: Row,
        conflict_columns: Sequence[str],
    ) -> bool:
        # Conflict columns are backed by a UNIQUE index in the schema
        self._check_columns(table, conflict_columns)
        data = self._prepare(table, record)
        with self._get_connection() as conn:
            cursor = conn.execute(
                self._insert_sql(table, data, verb="INSERT OR IGNORE"),
                list(data.values()),
            )
            return cursor.rowcount > 0

    def health_check(self) -> Dict[str, Any]:
        """Check database health and connectivity."""
        start_time = time.time()
        try:
            with self._get_connection() as conn:
                version = conn.execute("SELECT sqlite_version()").fetchone()[0]
            latency_ms = (time.time() - start_time) * 1000
            return {
                "healthy": True,
                "backend": "sqlite",
                "latency_ms": round(latency_ms, 2),
                "details": {"db_path": str(self.db_path), "version": version},
            }
        except BackendError as e:
            latency_ms = (time.time() - start_time) * 1000
            return {
                "healthy": False,
                "backend": "sqlite",
                "latency_ms": round(latency_ms, 2),
                "details": {"error": e.message, "db_path": str(self.db_path)},
            }
