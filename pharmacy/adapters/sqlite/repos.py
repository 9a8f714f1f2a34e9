import sqlite3
from datetime import datetime
from typing import Any
from uuid import UUID

from pharmacy.domain.entities import User
from pharmacy.ports.repo import UsernameTakenError


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteUserRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def save(self, user: User) -> User:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO users (
                    id, username, password_hash, role, active, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    username=excluded.username,
                    password_hash=excluded.password_hash,
                    role=excluded.role,
                    active=excluded.active,
                    updated_at=excluded.updated_at
            """,
                (
                    str(user.id),
                    user.username,
                    user.password_hash,
                    user.role,
                    1 if user.active else 0,
                    user.created_at.isoformat(),
                    user.updated_at.isoformat(),
                ),
            )
            conn.commit()
            return user
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if "users.username" in str(e):
                raise UsernameTakenError(user.username) from e
            raise
        finally:
            conn.close()

    def exists_by_username(self, username: str) -> bool:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT 1 AS found FROM users WHERE username = ? LIMIT 1", (username,)
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def get_by_username(self, username: str) -> User | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM users WHERE username = ?", (username,)).fetchone()
            if not row:
                return None
            return self._map_row_to_user(row)
        finally:
            conn.close()

    def list_all(self) -> list[User]:
        conn = self._get_conn()
        try:
            rows = conn.execute("SELECT * FROM users ORDER BY username").fetchall()
            return [self._map_row_to_user(row) for row in rows]
        finally:
            conn.close()

    def _map_row_to_user(self, row: dict[str, Any]) -> User:
        return User(
            id=UUID(row["id"]),
            username=row["username"],
            password_hash=row["password_hash"],
            role=row["role"],
            active=bool(row["active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
