from __future__ import annotations

from typing import Iterable, Mapping

from ..logs import LogContext
from ..store import ItemStore


def ensure_item_schema(db_path: str | None = None):
    with ItemStore.open(db_path) as store:
        store.setup()


def _normalize_batch(batch: Mapping[str, Iterable]) -> dict[str, list[tuple[str, float]]]:
    """Accept (name, price) pairs or {"name", "price"} dicts per category."""
    out: dict[str, list[tuple[str, float]]] = {}
    for category, items in batch.items():
        pairs = []
        for it in items:
            if isinstance(it, Mapping):
                pairs.append((it.get("name"), it.get("price")))
            else:
                name, price = it
                pairs.append((name, price))
        out[category] = pairs
    return out


def import_batch(batch: Mapping[str, Iterable], log: LogContext, db_path: str | None = None) -> int:
    pairs = _normalize_batch(batch)
    log.set_entity("CATEGORY", ",".join(pairs.keys()))
    log.set_payload({k: [list(p) for p in v] for k, v in pairs.items()})
    with ItemStore.open(db_path) as store:
        inserted = store.insert_batch(pairs)
    log.set_after({"inserted": inserted})
    return inserted


# ===== Read views for API / CLI =====
def list_items(db_path: str | None = None) -> list[dict]:
    with ItemStore.open(db_path) as store:
        return [it.to_dict() for it in store.list_items()]


def list_categories(db_path: str | None = None) -> list[dict]:
    with ItemStore.open(db_path) as store:
        return [c.to_dict() for c in store.list_categories()]


def _snapshot(store: ItemStore, name: str) -> list[dict]:
    return [it.to_dict() for it in store.list_items() if it.name == name]


def update_item_price(name: str, price: float, log: LogContext, db_path: str | None = None) -> int:
    """
    Set the price of every item called `name`. Returns the affected-count;
    0 means no such item and is not an error.
    """
    log.set_entity("ITEM", name)
    log.set_payload({"name": name, "price": price})
    with ItemStore.open(db_path) as store:
        log.set_before(_snapshot(store, name))
        affected = store.update_price(name, price)
        log.set_after(_snapshot(store, name))
    return affected


def remove_item(name: str, log: LogContext, db_path: str | None = None) -> int:
    log.set_entity("ITEM", name)
    log.set_payload({"name": name})
    with ItemStore.open(db_path) as store:
        log.set_before(_snapshot(store, name))
        affected = store.delete_item(name)
    log.set_after({"deleted": affected})
    return affected
