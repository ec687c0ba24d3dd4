from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Category:
    id: int
    name: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Item:
    """An item row joined with its category name. Detached from the store."""

    id: int
    name: str
    price: float
    category: str

    @classmethod
    def from_row(cls, row) -> "Item":
        return cls(
            id=int(row["id"]),
            name=row["name"],
            price=float(row["price"]),
            category=row["category"],
        )

    def to_dict(self) -> dict:
        return asdict(self)
