from grocery import db
from grocery.db import get_conn, get_db_path


def test_env_path_wins(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"db_path: {tmp_path / 'from_cfg.db'}\n", encoding="utf-8")
    monkeypatch.setenv("GROCERY_DB_PATH", str(tmp_path / "from_env.db"))

    assert get_db_path(str(cfg)) == str(tmp_path / "from_env.db")


def test_test_db_path_used_under_pytest(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        f"db_path: {tmp_path / 'prod.db'}\ntest_db_path: {tmp_path / 'test.db'}\n",
        encoding="utf-8",
    )
    monkeypatch.delenv("GROCERY_DB_PATH")

    assert get_db_path(str(cfg)) == str(tmp_path / "test.db")


def test_config_db_path_outside_tests(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        f"db_path: {tmp_path / 'nested' / 'prod.db'}\ntest_db_path: {tmp_path / 'test.db'}\n",
        encoding="utf-8",
    )
    monkeypatch.delenv("GROCERY_DB_PATH")
    monkeypatch.delenv("PYTEST_CURRENT_TEST")
    monkeypatch.delenv("APP_ENV", raising=False)

    assert get_db_path(str(cfg)) == str(tmp_path / "nested" / "prod.db")
    assert (tmp_path / "nested").is_dir()


def test_fallback_when_config_missing_or_broken(tmp_path, monkeypatch):
    monkeypatch.delenv("GROCERY_DB_PATH")
    bad = tmp_path / "config.yaml"
    bad.write_text("db_path: [unclosed\n", encoding="utf-8")

    assert get_db_path(str(bad)) == db._ROOT_DB
    assert get_db_path(str(tmp_path / "absent.yaml")) == db._ROOT_DB


def test_memory_path_passes_through(monkeypatch):
    monkeypatch.setenv("GROCERY_DB_PATH", ":memory:")
    assert get_db_path() == ":memory:"


def test_get_conn_enables_foreign_keys_and_rows(tmp_path):
    with get_conn(str(tmp_path / "x.db")) as conn:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        row = conn.execute("SELECT 1 AS one").fetchone()
        assert row["one"] == 1
        assert conn.isolation_level is None
