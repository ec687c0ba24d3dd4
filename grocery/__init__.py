"""Grocery item store: categories and items over SQLite."""

__version__ = "0.1.0"
