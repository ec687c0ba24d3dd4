from __future__ import annotations

import json, time, uuid, datetime as dt
from typing import Any, Optional
from .db import get_conn
from .errors import translate_errors

# Audit trail of mutating service calls (one row per call).
DDL = """
CREATE TABLE IF NOT EXISTS operation_log (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  ts TEXT NOT NULL,
  user TEXT NOT NULL,
  action TEXT NOT NULL,
  entity_type TEXT,
  entity_id TEXT,
  request_id TEXT,
  before_json TEXT,
  after_json TEXT,
  payload_json TEXT,
  result TEXT,
  err_msg TEXT,
  latency_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_log_ts ON operation_log(ts);
CREATE INDEX IF NOT EXISTS idx_log_action ON operation_log(action);
"""

_COLUMNS = (
    "ts", "user", "action", "entity_type", "entity_id", "request_id",
    "before_json", "after_json", "payload_json", "result", "err_msg", "latency_ms",
)


def ensure_log_schema(db_path: Optional[str] = None):
    with get_conn(db_path) as conn:
        conn.executescript(DDL)


def _dump(obj: Any) -> Optional[str]:
    return None if obj is None else json.dumps(obj, ensure_ascii=False)


class LogContext:
    """
    Collects one audited operation and persists it to operation_log.

    Either call write() explicitly, or use it as a context manager: leaving
    the block writes "OK", or "ERROR" with the exception text (the exception
    still propagates).
    """

    def __init__(self, action: str, user: str = "owner", db_path: Optional[str] = None):
        self.action = action
        self.user = user
        self.db_path = db_path
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.before = None
        self.after = None
        self.payload = None
        self.entity_type = None
        self.entity_id = None
        self.written = False

    def set_entity(self, etype: str, eid: str):
        self.entity_type = etype
        self.entity_id = eid

    def set_before(self, obj): self.before = obj
    def set_after(self, obj): self.after = obj
    def set_payload(self, obj): self.payload = obj

    def __enter__(self) -> "LogContext":
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.written:
            if exc is None:
                self.write("OK")
            else:
                self.write("ERROR", str(exc))
        return False

    def write(self, result: str = "OK", err: Optional[str] = None):
        rec = {
            "ts": dt.datetime.now(dt.timezone.utc).isoformat(),
            "user": self.user,
            "action": self.action,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "request_id": self.request_id,
            "before_json": _dump(self.before),
            "after_json": _dump(self.after),
            "payload_json": _dump(self.payload),
            "result": result,
            "err_msg": err,
            "latency_ms": int((time.perf_counter() - self.start) * 1000),
        }
        sql = "INSERT INTO operation_log({}) VALUES({})".format(
            ",".join(_COLUMNS), ",".join(":" + c for c in _COLUMNS)
        )
        with translate_errors("log_write"), get_conn(self.db_path) as conn:
            conn.execute(sql, rec)
        self.written = True


def search_logs(q: str | None, action: str | None, ts_from: str | None, ts_to: str | None,
                page: int, size: int, db_path: Optional[str] = None):
    """Page through operation_log, newest first. Returns (total, rows)."""
    filters = [
        ("(payload_json LIKE :q OR before_json LIKE :q OR after_json LIKE :q)", "q", f"%{q}%" if q else None),
        ("action = :action", "action", action),
        ("ts >= :from", "from", ts_from),
        ("ts <= :to", "to", ts_to),
    ]
    where = [clause for clause, _, v in filters if v]
    params = {k: v for _, k, v in filters if v}
    wh = " WHERE " + " AND ".join(where) if where else ""
    with get_conn(db_path) as conn:
        total = conn.execute(f"SELECT COUNT(1) AS cnt FROM operation_log{wh}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"SELECT * FROM operation_log{wh} ORDER BY ts DESC, id DESC LIMIT :limit OFFSET :offset",
            {**params, "limit": size, "offset": (max(page, 1) - 1) * size},
        ).fetchall()
        return total, [dict(r) for r in rows]
