"""Persistence port for client state: one string value per key."""

import sqlite3
from typing import Protocol

from skyboard.storage import state_repo
from skyboard.storage.database import connect, run_migrations


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class SqliteStorage:
    """On-device storage backed by the client_state table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    @classmethod
    def open(cls, db_path: str) -> "SqliteStorage":
        conn = connect(db_path)
        run_migrations(conn)
        return cls(conn)

    def get_item(self, key: str) -> str | None:
        return state_repo.get_value(self.conn, key)

    def set_item(self, key: str, value: str) -> None:
        state_repo.set_value(self.conn, key, value)

    def close(self) -> None:
        self.conn.close()
