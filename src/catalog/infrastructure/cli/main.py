import logging

import click

from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_reduce_stock,
    product_show,
    product_update,
)
from catalog.infrastructure.config import Settings


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def cli(verbose: bool) -> None:
    """Catalog — supplier product management"""
    level = "DEBUG" if verbose else Settings.from_env().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_reduce_stock)
product.add_command(product_show)
product.add_command(product_update)
