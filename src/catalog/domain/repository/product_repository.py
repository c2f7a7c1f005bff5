"""Abstract repository for the Product entity.

Defined in the domain layer so the service never depends on
infrastructure. Every method is a coroutine: implementations may suspend
on network or disk I/O.

Implementations report failures with the exceptions in
``catalog.domain.exceptions``: ``ValidationError`` when the data is
rejected, ``EntityNotFoundError`` when a targeted product is absent and
``StorageError`` for anything else.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from catalog.domain.model.product import NewProduct, Product


class ProductRepository(ABC):

    @abstractmethod
    async def find_all(self, supplier_id: Any) -> list[Product]:
        """Return every product of a supplier."""

    @abstractmethod
    async def find_one(self, supplier_id: Any, product_id: int) -> Product | None:
        """Return one product of a supplier, or None if not found."""

    @abstractmethod
    async def create(self, data: NewProduct) -> Product:
        """Persist a new product and return it with its assigned id."""

    @abstractmethod
    async def update(self, product_id: int, supplier_id: Any, fields: dict[str, Any]) -> None:
        """Overwrite the given fields of an existing product."""

    @abstractmethod
    async def delete(self, product_id: int, supplier_id: Any) -> None:
        """Remove a product. Deleting an absent product is a no-op."""

    @abstractmethod
    async def reduce_stock(self, product_id: int, supplier_id: Any, quantity: int) -> Product:
        """Atomically decrement stock by ``quantity``.

        Must check and write in one step: raises InsufficientStockError
        if the current stock is lower than ``quantity``.
        """
