"""CLI commands for the Product entity."""

from __future__ import annotations

import asyncio
import json

import click

from catalog.application.dto import ProductChanges, ProductRef, Result, StockReduction
from catalog.domain.model.product import NewProduct
from catalog.infrastructure.bootstrap import product_service


def _emit(result: Result) -> None:
    """Print a successful body as JSON, or fail with the error message."""
    if not result.ok:
        error = result.error
        if isinstance(error, list):
            error = "; ".join(error)
        raise click.ClickException(f"[{result.status}] {error}")

    if result.body is not None:
        click.echo(json.dumps(result.body, indent=2))
    else:
        click.echo("OK")


@click.command("list")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
def product_list(supplier_id: int) -> None:
    """List all products of a supplier."""
    _emit(asyncio.run(product_service().list_products(supplier_id)))


@click.command("show")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(supplier_id: int, product_id: int) -> None:
    """Show a single product."""
    _emit(asyncio.run(product_service().get_product(supplier_id, product_id)))


@click.command("add")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--name", required=True, help="Product name (3-255 characters).")
@click.option("--price", required=True, type=float, help="Price (e.g. 9.99).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
def product_add(supplier_id: int, name: str, price: float, stock: int) -> None:
    """Add a new product to a supplier's catalog."""
    data = NewProduct(name=name, price=price, stock=stock, supplier_id=supplier_id)
    _emit(asyncio.run(product_service().create_product(data)))


@click.command("update")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, type=float, help="New price.")
@click.option("--stock", default=None, type=int, help="New stock level.")
def product_update(
    supplier_id: int,
    product_id: int,
    name: str | None,
    price: float | None,
    stock: int | None,
) -> None:
    """Change some fields of a product."""
    changes = ProductChanges(
        id=product_id, supplier_id=supplier_id, name=name, price=price, stock=stock
    )
    _emit(asyncio.run(product_service().update_product(changes)))


@click.command("delete")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_delete(supplier_id: int, product_id: int) -> None:
    """Remove a product from a supplier's catalog."""
    ref = ProductRef(id=product_id, supplier_id=supplier_id)
    _emit(asyncio.run(product_service().delete_product(ref)))


@click.command("reduce-stock")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to take out of stock.")
def product_reduce_stock(supplier_id: int, product_id: int, quantity: int) -> None:
    """Take units out of a product's stock."""
    request = StockReduction(id=product_id, supplier_id=supplier_id, quantity=quantity)
    _emit(asyncio.run(product_service().reduce_stock(request)))
