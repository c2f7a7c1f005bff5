"""Product entity and its field rules.

A product's lifecycle is owned by the store. The entity is a plain
record; the rules live in module-level functions so the service can
check a payload before anything is persisted and the store can check
it again before writing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 255

NAME_RULE = "Product name must be between 3 and 255 characters"
STOCK_RULE = "Stock must be a positive integer number"
PRICE_RULE = "Price must be a positive float number"
QUANTITY_RULE = "Quantity must be an integer number"


@dataclass
class Product:
    """A product offered by a supplier."""

    id: int
    name: str
    price: float
    stock: int
    supplier_id: Any

    def to_public_dict(self) -> dict[str, Any]:
        """Fields exposed to callers; ``supplier_id`` stays internal."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "stock": self.stock,
        }


@dataclass(frozen=True)
class NewProduct:
    """A product that has not been stored yet.

    Field values are kept exactly as received so the rules can reject
    wrong types as well as wrong ranges.
    """

    name: Any
    price: Any
    stock: Any
    supplier_id: Any

    def fields(self) -> dict[str, Any]:
        return {"name": self.name, "price": self.price, "stock": self.stock}


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid price or stock
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def name_is_valid(name: Any) -> bool:
    return isinstance(name, str) and NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH


def stock_is_valid(stock: Any) -> bool:
    return isinstance(stock, int) and not isinstance(stock, bool) and stock >= 0


def quantity_is_valid(quantity: Any) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool)


def price_is_valid(price: Any) -> bool:
    return _is_number(price) and price >= 0


def validate_fields(fields: dict[str, Any], partial: bool = False) -> list[str]:
    """Return every rule the given fields violate.

    With ``partial`` set, only the fields present in the mapping are
    checked (used for updates). Order of messages is name, stock, price.
    """
    errors: list[str] = []
    if (not partial or "name" in fields) and not name_is_valid(fields.get("name")):
        errors.append(NAME_RULE)
    if (not partial or "stock" in fields) and not stock_is_valid(fields.get("stock")):
        errors.append(STOCK_RULE)
    if (not partial or "price" in fields) and not price_is_valid(fields.get("price")):
        errors.append(PRICE_RULE)
    return errors
