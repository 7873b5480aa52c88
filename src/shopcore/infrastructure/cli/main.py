from pathlib import Path

import click

from shopcore.application.resources import ResourceType
from shopcore.infrastructure.bootstrap import DEFAULT_DATA_DIR, configure_logging, record_store
from shopcore.infrastructure.cli.category_commands import category_add, subcategory_add
from shopcore.infrastructure.cli.order_commands import display_order, order_place, order_set_status
from shopcore.infrastructure.cli.product_commands import (
    product_add,
    product_price,
    product_update,
    variant_add,
    variant_update,
)
from shopcore.infrastructure.cli.resource_commands import (
    make_delete_command,
    make_list_command,
    make_show_command,
)


@click.group()
@click.option(
    "--data-dir",
    envvar="SHOPCORE_DATA_DIR",
    default=DEFAULT_DATA_DIR,
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the JSON record files.",
)
@click.option(
    "--log-level",
    envvar="SHOPCORE_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging verbosity.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_level: str) -> None:
    """Shopcore: storefront catalog, pricing and checkout administration"""
    configure_logging(log_level)
    ctx.obj = record_store(data_dir)


@cli.group()
def products() -> None:
    """Manage products."""


@cli.group()
def variants() -> None:
    """Manage product variants."""


@cli.group()
def categories() -> None:
    """Manage categories."""


@cli.group()
def subcategories() -> None:
    """Manage subcategories."""


@cli.group()
def customers() -> None:
    """Browse customers."""


@cli.group()
def orders() -> None:
    """Place and manage orders."""


# Register subcommands
products.add_command(product_add)
products.add_command(product_update)
products.add_command(product_price)
variants.add_command(variant_add)
variants.add_command(variant_update)
categories.add_command(category_add)
subcategories.add_command(subcategory_add)
orders.add_command(order_place)
orders.add_command(order_set_status)

_GROUPS = {
    ResourceType.PRODUCTS: products,
    ResourceType.VARIANTS: variants,
    ResourceType.CATEGORIES: categories,
    ResourceType.SUBCATEGORIES: subcategories,
    ResourceType.CUSTOMERS: customers,
    ResourceType.ORDERS: orders,
}

for _resource, _group in _GROUPS.items():
    _group.add_command(make_list_command(_resource))
    if _resource is ResourceType.ORDERS:
        # Orders are cancelled, never deleted.
        _group.add_command(make_show_command(_resource, display_order))
    else:
        _group.add_command(make_show_command(_resource))
        _group.add_command(make_delete_command(_resource))
