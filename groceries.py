#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Grocery item store (SQLite)

Commands:
  demo                Create tables, insert the sample batch, print, update Apple, delete Banana, print again
  init                Create the categories/items tables if missing
  list                Print all items with their category
  add                 Add one item under a category (category created on first use)
  update-price        Set the price of every item with a given name
  delete              Delete every item with a given name
  report              Export the item list to CSV

Notes:
- The DB path comes from --db, then GROCERY_DB_PATH, then config.yaml, then ./grocery.db.
- Update/delete on an unknown name prints a notice; it is not a failure.
"""

import argparse
import logging
import sys

from grocery.db import get_db_path
from grocery.errors import StoreError
from grocery.services.report_svc import export_items_csv
from grocery.store import ItemStore

logger = logging.getLogger("groceries")

DEMO_BATCH = {
    "Fruits": [("Apple", 1.2), ("Banana", 0.5)],
    "Vegetables": [("Carrot", 0.8), ("Lettuce", 1.0)],
}


# ---------------- helpers ----------------

def open_store(args) -> ItemStore:
    return ItemStore.open(args.db or get_db_path(args.config))


def print_items(store: ItemStore):
    for item in store.list_items():
        print(item)


def report_update(store: ItemStore, name: str, price: float):
    if store.update_price(name, price) == 0:
        print(f"No item found with the name '{name}'.")
    else:
        print(f"Updated price for item '{name}'.")


def report_delete(store: ItemStore, name: str):
    if store.delete_item(name) == 0:
        print(f"No item found with the name '{name}'.")
    else:
        print(f"Deleted item '{name}'.")


# ---------------- commands ----------------

def cmd_demo(args):
    with open_store(args) as store:
        store.setup()
        print("Tables created successfully.")

        store.insert_batch(DEMO_BATCH)
        print("Data inserted successfully.")

        print("All grocery items:")
        print_items(store)

        report_update(store, "Apple", 1.5)
        report_delete(store, "Banana")

        print("\nGrocery items after update and delete:")
        print_items(store)


def cmd_init(args):
    with open_store(args) as store:
        store.setup()
    print("Tables created successfully.")


def cmd_list(args):
    with open_store(args) as store:
        store.setup()
        items = store.list_items()
        if not items:
            print("(empty)")
        for item in items:
            print(item)


def cmd_add(args):
    with open_store(args) as store:
        store.setup()
        store.insert_batch({args.category: [(args.name, args.price)]})
    print(f"Added item '{args.name}' to '{args.category}'.")


def cmd_update_price(args):
    with open_store(args) as store:
        report_update(store, args.name, args.price)


def cmd_delete(args):
    with open_store(args) as store:
        report_delete(store, args.name)


def cmd_report(args):
    path = export_items_csv(args.out, db_path=args.db or get_db_path(args.config))
    print(f"CSV exported to {path}")


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grocery item store (SQLite)")
    parser.add_argument("--config", default=None, help="path to config.yaml")
    parser.add_argument("--db", default=None, help="database file (or :memory:)")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.set_defaults(func=cmd_demo)
    sub = parser.add_subparsers()

    p_demo = sub.add_parser("demo", help="run the sample CRUD flow")
    p_demo.set_defaults(func=cmd_demo)

    p_init = sub.add_parser("init", help="create tables")
    p_init.set_defaults(func=cmd_init)

    p_list = sub.add_parser("list", help="print all items")
    p_list.set_defaults(func=cmd_list)

    p_add = sub.add_parser("add", help="add one item")
    p_add.add_argument("--category", required=True)
    p_add.add_argument("--name", required=True)
    p_add.add_argument("--price", required=True, type=float)
    p_add.set_defaults(func=cmd_add)

    p_upd = sub.add_parser("update-price", help="set price by item name")
    p_upd.add_argument("--name", required=True)
    p_upd.add_argument("--price", required=True, type=float)
    p_upd.set_defaults(func=cmd_update_price)

    p_del = sub.add_parser("delete", help="delete by item name")
    p_del.add_argument("--name", required=True)
    p_del.set_defaults(func=cmd_delete)

    p_rep = sub.add_parser("report", help="export items as CSV")
    p_rep.add_argument("--out", required=False, help="output directory (default ./exports)")
    p_rep.set_defaults(func=cmd_report)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except StoreError as e:
        logger.debug("command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
