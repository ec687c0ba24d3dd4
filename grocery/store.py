from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping

from .db import connect, get_db_path
from .domain.models import Category, Item
from .errors import StoreError, translate_errors
from .repository import category_repo, item_repo

logger = logging.getLogger(__name__)


class ItemStore:
    """
    CRUD over the categories/items schema, bound to one SQLite connection.

    The store owns the connection it is given and closes it in close() or on
    leaving a `with` block. It is not safe to share across threads; open one
    store per caller instead.
    """

    def __init__(self, conn: sqlite3.Connection):
        self._conn: sqlite3.Connection | None = conn

    @classmethod
    def open(cls, db_path: str | None = None) -> "ItemStore":
        path = db_path or get_db_path()
        with translate_errors("open"):
            conn = connect(path)
        logger.debug("opened item store at %s", path)
        return cls(conn)

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("store is closed", op="conn")
        return self._conn

    def close(self):
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "ItemStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self.conn
        conn.execute("BEGIN")
        try:
            yield conn
            # a failed COMMIT (e.g. database is locked) leaves the transaction open
            conn.execute("COMMIT")
        except BaseException:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise

    def setup(self):
        """Create the categories and items tables if they are missing."""
        with translate_errors("setup"), self._transaction() as conn:
            category_repo.ensure_schema(conn)
            item_repo.ensure_schema(conn)

    def insert_batch(self, category_to_items: Mapping[str, Iterable[tuple[str, float]]]) -> int:
        """
        Insert items grouped by category name, creating categories on first use.

        Existing categories are reused: the id is looked up by name after the
        insert-or-ignore, so items never attach to another category's row.
        The whole batch is one transaction; on any failure nothing is kept.
        Returns the number of items inserted.
        """
        inserted = 0
        with translate_errors("insert_batch"), self._transaction() as conn:
            for category, items in category_to_items.items():
                category_repo.add_if_missing(conn, category)
                category_id = category_repo.get_id(conn, category)
                if category_id is None:
                    raise StoreError(f"category {category!r} missing after insert", op="insert_batch")
                for name, price in items:
                    item_repo.insert(conn, name, price, category_id)
                    inserted += 1
        logger.debug("inserted %d items across %d categories", inserted, len(category_to_items))
        return inserted

    def list_items(self) -> list[Item]:
        """All items with their category name, in id (insertion) order."""
        with translate_errors("list_items"):
            rows = item_repo.list_with_category(self.conn)
        return [Item.from_row(r) for r in rows]

    def list_categories(self) -> list[Category]:
        with translate_errors("list_categories"):
            rows = category_repo.list_all(self.conn)
        return [Category(id=int(r["id"]), name=r["name"]) for r in rows]

    def count_items(self) -> int:
        with translate_errors("count_items"):
            return item_repo.count(self.conn)

    def update_price(self, item_name: str, new_price: float) -> int:
        # 0 affected rows means no item has that name; not an error
        with translate_errors("update_price"):
            affected = item_repo.set_price_by_name(self.conn, item_name, new_price)
        if affected == 0:
            logger.info("No item found with the name '%s'.", item_name)
        return affected

    def delete_item(self, item_name: str) -> int:
        with translate_errors("delete_item"):
            affected = item_repo.delete_by_name(self.conn, item_name)
        if affected == 0:
            logger.info("No item found with the name '%s'.", item_name)
        return affected
