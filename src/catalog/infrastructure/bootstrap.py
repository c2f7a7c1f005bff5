"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from catalog.application.product_service import ProductService
from catalog.infrastructure.config import Settings
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository(settings: Settings | None = None) -> JsonProductRepository:
    settings = settings or Settings.from_env()
    return JsonProductRepository(settings.products_file)


def product_service(settings: Settings | None = None) -> ProductService:
    return ProductService(product_repo=product_repository(settings))
