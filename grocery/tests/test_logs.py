import json

import pytest

from grocery.errors import StoreError
from grocery.logs import LogContext, search_logs


def test_write_explicit(tmp_db_path):
    log = LogContext("ITEM_DELETE")
    log.set_entity("ITEM", "Banana")
    log.set_payload({"name": "Banana"})
    log.write("OK")

    total, rows = search_logs(None, "ITEM_DELETE", None, None, 1, 20)
    assert total == 1
    assert rows[0]["entity_id"] == "Banana"
    assert json.loads(rows[0]["payload_json"]) == {"name": "Banana"}
    assert rows[0]["before_json"] is None


def test_context_manager_records_ok_and_error(tmp_db_path):
    with LogContext("ITEM_UPDATE_PRICE") as log:
        log.set_after({"price": 1.5})

    with pytest.raises(RuntimeError):
        with LogContext("ITEM_UPDATE_PRICE"):
            raise RuntimeError("disk on fire")

    total, rows = search_logs(None, "ITEM_UPDATE_PRICE", None, None, 1, 20)
    assert total == 2
    assert sorted(r["result"] for r in rows) == ["ERROR", "OK"]
    err = [r for r in rows if r["result"] == "ERROR"][0]
    assert err["err_msg"] == "disk on fire"


def test_context_manager_does_not_write_twice(tmp_db_path):
    with LogContext("ITEM_BATCH_IMPORT") as log:
        log.write("ERROR", "bad input")
    total, rows = search_logs(None, None, None, None, 1, 20)
    assert total == 1
    assert rows[0]["result"] == "ERROR"


def test_search_filters_and_paging(tmp_db_path):
    for name in ("Apple", "Banana", "Carrot"):
        log = LogContext("ITEM_DELETE")
        log.set_payload({"name": name})
        log.write()
    LogContext("ITEM_BATCH_IMPORT").write()

    total, rows = search_logs("Banana", None, None, None, 1, 20)
    assert total == 1 and json.loads(rows[0]["payload_json"])["name"] == "Banana"

    total, rows = search_logs(None, "ITEM_DELETE", None, None, 1, 2)
    assert total == 3 and len(rows) == 2
    _, page2 = search_logs(None, "ITEM_DELETE", None, None, 2, 2)
    assert len(page2) == 1

    total, _ = search_logs(None, None, "9999-01-01", None, 1, 20)
    assert total == 0


def test_write_failure_raises_store_error(tmp_path):
    log = LogContext("ITEM_DELETE", db_path=str(tmp_path / "no_log_table.db"))
    with pytest.raises(StoreError) as ei:
        log.write("OK")
    assert ei.value.op == "log_write"
    assert "no such table" in str(ei.value)
    assert not log.written
