from __future__ import annotations

# grocery/services/report_svc.py
import datetime as dt
import os
import sqlite3

import pandas as pd

from ..db import get_conn
from ..errors import StoreError

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

ITEMS_SQL = """
SELECT i.id, i.name, i.price, c.name AS category
FROM items i
JOIN categories c ON i.category_id = c.id
ORDER BY i.id
"""


def items_frame(db_path: str | None = None) -> pd.DataFrame:
    try:
        with get_conn(db_path) as conn:
            conn.row_factory = None  # plain tuples for pandas
            return pd.read_sql_query(ITEMS_SQL, conn)
    # pandas re-raises engine failures as its own DatabaseError
    except (sqlite3.Error, pd.errors.DatabaseError) as e:
        raise StoreError(str(e), op="items_frame") from e


def export_items_csv(out_dir: str | None = None, db_path: str | None = None,
                     date: str | None = None) -> str:
    """Write the joined item view to <out_dir>/items_<YYYYMMDD>.csv and return the path."""
    df = items_frame(db_path)
    out_dir = out_dir or os.path.join(_PROJECT_ROOT, "exports")
    os.makedirs(out_dir, exist_ok=True)
    date = date or dt.date.today().strftime("%Y%m%d")
    path = os.path.join(out_dir, f"items_{date}.csv")
    df.to_csv(path, index=False, encoding="utf-8-sig")
    return path
