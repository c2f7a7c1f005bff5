"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from catalog.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    StorageError,
    ValidationError,
)
from catalog.domain.model.product import (
    QUANTITY_RULE,
    NewProduct,
    Product,
    quantity_is_valid,
    validate_fields,
)
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class JsonProductRepository(ProductRepository):
    """Keeps every product in one JSON array on disk.

    File I/O runs in a worker thread so the event loop keeps serving other
    requests. A single lock guards each load-modify-persist cycle, which
    makes every write atomic with respect to other coroutines using the
    same instance. The file is replaced whole, so readers never see a
    partial write.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = asyncio.Lock()
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    async def find_all(self, supplier_id: Any) -> list[Product]:
        products = await asyncio.to_thread(self._load)
        return [p for p in products.values() if p.supplier_id == supplier_id]

    async def find_one(self, supplier_id: Any, product_id: int) -> Product | None:
        products = await asyncio.to_thread(self._load)
        product = products.get(product_id)
        if product is None or product.supplier_id != supplier_id:
            return None
        return product

    async def create(self, data: NewProduct) -> Product:
        errors = validate_fields(data.fields())
        if data.supplier_id is None:
            errors.append("Supplier is required")
        if errors:
            raise ValidationError(errors)

        async with self._lock:
            products = await asyncio.to_thread(self._load)
            next_id = max(products, default=0) + 1
            product = Product(
                id=next_id,
                name=data.name,
                price=data.price,
                stock=data.stock,
                supplier_id=data.supplier_id,
            )
            products[product.id] = product
            await asyncio.to_thread(self._persist, products)

        logger.debug("Stored product %s in %s", product.id, self._file_path)
        return product

    async def update(self, product_id: int, supplier_id: Any, fields: dict[str, Any]) -> None:
        unknown = set(fields) - {"name", "price", "stock"}
        if unknown:
            raise ValidationError([f"Unknown field: {name}" for name in sorted(unknown)])
        errors = validate_fields(fields, partial=True)
        if errors:
            raise ValidationError(errors)

        async with self._lock:
            products = await asyncio.to_thread(self._load)
            product = self._owned(products, product_id, supplier_id)
            for field, value in fields.items():
                setattr(product, field, value)
            await asyncio.to_thread(self._persist, products)

    async def delete(self, product_id: int, supplier_id: Any) -> None:
        async with self._lock:
            products = await asyncio.to_thread(self._load)
            product = products.get(product_id)
            if product is None or product.supplier_id != supplier_id:
                return
            del products[product_id]
            await asyncio.to_thread(self._persist, products)

    async def reduce_stock(self, product_id: int, supplier_id: Any, quantity: int) -> Product:
        if not quantity_is_valid(quantity):
            raise ValidationError(QUANTITY_RULE)

        async with self._lock:
            products = await asyncio.to_thread(self._load)
            product = self._owned(products, product_id, supplier_id)
            if quantity < 0 or quantity > product.stock:
                raise InsufficientStockError()
            product.stock -= quantity
            await asyncio.to_thread(self._persist, products)
        return product

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _owned(products: dict[int, Product], product_id: int, supplier_id: Any) -> Product:
        product = products.get(product_id)
        if product is None or product.supplier_id != supplier_id:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def _load(self) -> dict[int, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return {
                item["id"]: Product(
                    id=item["id"],
                    name=item["name"],
                    price=item["price"],
                    stock=item["stock"],
                    supplier_id=item["supplier_id"],
                )
                for item in raw
            }
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise StorageError(f"Cannot read products from {self._file_path}") from exc

    def _persist(self, products: dict[int, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "price": p.price,
                "stock": p.stock,
                "supplier_id": p.supplier_id,
            }
            for p in products.values()
        ]
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(json.dumps(raw, indent=2) + "\n")
                os.replace(tmp_name, self._file_path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageError(f"Cannot write products to {self._file_path}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
