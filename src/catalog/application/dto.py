"""Data Transfer Objects — plain containers that cross layer boundaries.

Inputs describe what the caller asked for; ``Result`` is the single
shape every service operation returns, success or failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Result:
    """Outcome of a service operation: an HTTP-style status and a body.

    Failures always carry ``{"error": ...}`` as the body, where the value
    is either one message or a list of messages.
    """

    status: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def error(self) -> Any:
        if self.ok or not isinstance(self.body, dict):
            return None
        return self.body.get("error")

    @classmethod
    def success(cls, status: int, body: Any = None) -> Result:
        return cls(status=status, body=body)

    @classmethod
    def failure(cls, status: int, error: str | list[str]) -> Result:
        return cls(status=status, body={"error": error})


@dataclass(frozen=True)
class ProductRef:
    """Input: identifies one product of one supplier."""

    id: int
    supplier_id: Any


@dataclass(frozen=True)
class ProductChanges:
    """Input: a partial update.

    A field left as ``None`` was not provided. Any other value, including
    ``0`` and ``""``, is part of the update.
    """

    id: int
    supplier_id: Any
    name: Any = None
    price: Any = None
    stock: Any = None

    def provided(self) -> dict[str, Any]:
        candidates = {"name": self.name, "price": self.price, "stock": self.stock}
        return {field: value for field, value in candidates.items() if value is not None}


@dataclass(frozen=True)
class StockReduction:
    """Input: take ``quantity`` units out of a product's stock."""

    id: int
    supplier_id: Any
    quantity: int
