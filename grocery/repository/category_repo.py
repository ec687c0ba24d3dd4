from sqlite3 import Connection
from typing import Optional


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS categories (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL UNIQUE
        )
        """
    )


def add_if_missing(conn: Connection, name: str):
    conn.execute("INSERT OR IGNORE INTO categories(name) VALUES(?)", (name,))


def get_id(conn: Connection, name: str) -> Optional[int]:
    row = conn.execute("SELECT id FROM categories WHERE name=?", (name,)).fetchone()
    return int(row["id"]) if row else None


def list_all(conn: Connection):
    return conn.execute("SELECT id, name FROM categories ORDER BY id").fetchall()
