from sqlite3 import Connection


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS items (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            price REAL NOT NULL,
            category_id INTEGER NOT NULL REFERENCES categories(id)
        )
        """
    )


def insert(conn: Connection, name: str, price: float, category_id: int) -> int:
    cur = conn.execute(
        "INSERT INTO items(name, price, category_id) VALUES(?,?,?)",
        (name, price, category_id),
    )
    return cur.lastrowid


def list_with_category(conn: Connection):
    sql = (
        "SELECT i.id, i.name, i.price, c.name AS category "
        "FROM items i INNER JOIN categories c ON i.category_id = c.id "
        "ORDER BY i.id"
    )
    return conn.execute(sql).fetchall()


def count(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS cnt FROM items").fetchone()["cnt"])


def set_price_by_name(conn: Connection, name: str, price: float) -> int:
    cur = conn.execute("UPDATE items SET price=? WHERE name=?", (price, name))
    return cur.rowcount


def delete_by_name(conn: Connection, name: str) -> int:
    cur = conn.execute("DELETE FROM items WHERE name=?", (name,))
    return cur.rowcount
