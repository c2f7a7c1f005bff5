"""Application service: product use cases for a supplier's catalog.

Each operation validates its input, delegates to the repository and
turns the outcome into a ``Result``. Nothing raises past this layer.
"""

from __future__ import annotations

import logging
from typing import Any

from catalog.application.dto import ProductChanges, ProductRef, Result, StockReduction
from catalog.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from catalog.domain.model.product import (
    QUANTITY_RULE,
    NewProduct,
    quantity_is_valid,
    validate_fields,
)
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

NOT_FOUND = "Product not found"
NO_FIELDS = "No fields to update"
NOT_ENOUGH_STOCK = "Stock is not enough"


class ProductService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def list_products(self, supplier_id: Any) -> Result:
        try:
            products = await self._product_repo.find_all(supplier_id)
        except Exception:
            logger.exception("Listing products of supplier %s failed", supplier_id)
            return Result.failure(500, "An error occurred while fetching products")

        return Result.success(200, [p.to_public_dict() for p in products])

    async def get_product(self, supplier_id: Any, product_id: int) -> Result:
        try:
            product = await self._product_repo.find_one(supplier_id, product_id)
        except Exception:
            logger.exception("Fetching product %s failed", product_id)
            return Result.failure(500, "An error occurred while fetching product")

        if product is None:
            return Result.failure(404, NOT_FOUND)
        return Result.success(200, product.to_public_dict())

    async def create_product(self, data: NewProduct) -> Result:
        errors = validate_fields(data.fields())
        if errors:
            logger.debug("Rejected new product: %s", errors)
            return Result.failure(400, errors)

        try:
            product = await self._product_repo.create(data)
        except ValidationError as exc:
            return Result.failure(400, exc.messages)
        except Exception:
            logger.exception("Creating product failed")
            return Result.failure(500, "An error occurred while creating product")

        logger.info("Created product %s for supplier %s", product.id, product.supplier_id)
        return Result.success(201, product.to_public_dict())

    async def update_product(self, changes: ProductChanges) -> Result:
        fields = changes.provided()
        if not fields:
            return Result.failure(400, NO_FIELDS)

        errors = validate_fields(fields, partial=True)
        if errors:
            return Result.failure(400, errors)

        try:
            await self._product_repo.update(changes.id, changes.supplier_id, fields)
        except ValidationError as exc:
            return Result.failure(400, exc.messages)
        except EntityNotFoundError:
            return Result.failure(404, NOT_FOUND)
        except Exception:
            logger.exception("Updating product %s failed", changes.id)
            return Result.failure(500, "An error occurred while updating product")

        return Result.success(204)

    async def delete_product(self, ref: ProductRef) -> Result:
        try:
            await self._product_repo.delete(ref.id, ref.supplier_id)
        except Exception:
            logger.exception("Deleting product %s failed", ref.id)
            return Result.failure(500, "An error occurred while deleting product")

        return Result.success(204)

    async def reduce_stock(self, request: StockReduction) -> Result:
        """Take ``request.quantity`` units out of stock.

        The current stock is read first to answer 404 and obvious
        shortfalls without a write. The decrement itself is conditional
        in the store, so a concurrent reduction that drains the stock in
        between still ends in a 400 instead of a negative stock.
        """
        if not quantity_is_valid(request.quantity):
            return Result.failure(400, [QUANTITY_RULE])

        try:
            product = await self._product_repo.find_one(request.supplier_id, request.id)
            if product is None:
                return Result.failure(404, NOT_FOUND)

            if request.quantity < 0 or request.quantity > product.stock:
                return Result.failure(400, NOT_ENOUGH_STOCK)

            await self._product_repo.reduce_stock(
                request.id, request.supplier_id, request.quantity
            )
        except InsufficientStockError:
            logger.info("Stock of product %s changed before reduction", request.id)
            return Result.failure(400, NOT_ENOUGH_STOCK)
        except ValidationError as exc:
            return Result.failure(400, exc.messages)
        except EntityNotFoundError:
            return Result.failure(404, NOT_FOUND)
        except Exception:
            logger.exception("Reducing stock of product %s failed", request.id)
            return Result.failure(500, "An error occurred while reducing stock")

        return Result.success(204)
