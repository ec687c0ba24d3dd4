import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "grocery_test.db"
    # Point the package to this temp DB
    os.environ["GROCERY_DB_PATH"] = str(path)
    # Initialize schemas
    from grocery.logs import ensure_log_schema
    from grocery.services.item_svc import ensure_item_schema
    ensure_item_schema(str(path))
    ensure_log_schema(str(path))
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    from grocery.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture()
def store():
    from grocery.store import ItemStore
    s = ItemStore.open(":memory:")
    s.setup()
    yield s
    s.close()


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: only ever wipe the temp DB
    assert os.environ.get("GROCERY_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("items", "categories", "operation_log"):
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield
