from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator


class StoreError(Exception):
    """A failure reported by the underlying SQLite engine."""

    def __init__(self, message: str, op: str | None = None):
        super().__init__(f"{op}: {message}" if op else message)
        self.op = op
        self.message = message


@contextmanager
def translate_errors(op: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as e:
        raise StoreError(str(e), op=op) from e
