"""Repository for locally stored accounts (SQLite backend only).

With the hosted backend, accounts live in Supabase Auth and this table is
never touched.
"""

from dataclasses import dataclass
from typing import Optional

from ..backends import Backend, Row


@dataclass
class UserRecord:
    """Local account row."""

    id: str
    email: str
    password_hash: str
    created_at: Optional[str] = None


class UserRepository:
    """Lookup and creation of local accounts by email."""

    table = "users"

    def __init__(self, backend: Backend):
        self.backend = backend

    @staticmethod
    def _row_to_user(row: Row) -> UserRecord:
        return UserRecord(
            id=row["id"],
            email=row["email"],
            password_hash=row["password_hash"],
            created_at=row.get("created_at"),
        )

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        rows = self.backend.select(self.table, eq={"email": email.lower()}, limit=1)
        return self._row_to_user(rows[0]) if rows else None

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        rows = self.backend.select(self.table, eq={"id": user_id}, limit=1)
        return self._row_to_user(rows[0]) if rows else None

    def create(self, email: str, password_hash: str) -> UserRecord:
        """
        Create an account.

        Raises:
            ConflictError: If the email is already registered
        """
        row = self.backend.insert(
            self.table, {"email": email.lower(), "password_hash": password_hash}
        )
        return self._row_to_user(row)
