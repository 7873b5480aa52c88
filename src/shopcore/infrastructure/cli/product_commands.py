"""CLI commands for products and their variants."""

from __future__ import annotations

import click

from shopcore.application.add_product import AddProductHandler, AddVariantHandler
from shopcore.application.resources import ResourceType
from shopcore.application.show_resource import ShowResourceHandler
from shopcore.application.update_product import UpdateProductHandler
from shopcore.domain.exceptions import DomainException
from shopcore.domain.model.currency import currency_for_country, normalize_currency
from shopcore.domain.service.variant_selection import select_listing
from shopcore.infrastructure.bootstrap import price_resolver


def _price_options(func):
    func = click.option("--price-ghs", default=None, help="Explicit price in GHS.")(func)
    func = click.option("--price-ngn", default=None, help="Explicit price in NGN.")(func)
    func = click.option("--price", default=None, help="Base price in USD (e.g. 15.00).")(func)
    return func


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@_price_options
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--description", default="", help="Product description.")
@click.option("--category", "category_id", default=None, help="Category ID.")
@click.option("--subcategory", "subcategory_id", default=None, help="Subcategory ID.")
@click.pass_obj
def product_add(store, name, price, price_ngn, price_ghs, stock, description, category_id, subcategory_id) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(store)

    try:
        product = handler.handle(
            name=name,
            price=price,
            price_ngn=price_ngn,
            price_ghs=price_ghs,
            stock=stock,
            description=description,
            category_id=category_id,
            subcategory_id=subcategory_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added")


@click.command("update")
@click.option("--id", "item_id", required=True, help="Product ID.")
@_price_options
@click.option("--stock", default=None, type=int, help="Units in stock.")
@click.pass_obj
def product_update(store, item_id, price, price_ngn, price_ghs, stock) -> None:
    """Update a product's prices or stock."""
    _update(store, ResourceType.PRODUCTS, item_id, price, price_ngn, price_ghs, stock)


@click.command("price")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--variant", "variant_id", default=None, help="Selected variant ID.")
@click.option("--currency", default=None, help="Currency code (USD, NGN, GHS).")
@click.option("--country", default=None, help="Visitor country code; picks the currency.")
@click.pass_obj
def product_price(store, product_id, variant_id, currency, country) -> None:
    """Show the price a shopper sees for a product (or one of its variants)."""
    resolver = price_resolver()
    show = ShowResourceHandler(store)

    try:
        code = normalize_currency(currency) if currency else currency_for_country(country)
        product = show.handle(ResourceType.PRODUCTS, product_id)
        variant = show.handle(ResourceType.VARIANTS, variant_id) if variant_id else None
        listing = select_listing(product, variant, code, resolver)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{listing.item.name}: {listing.price.money}  ({listing.price.source.value})")
    click.echo(f"In stock: {listing.stock}")
    if listing.price.is_missing:
        click.echo("Warning: no price is set for this item.", err=True)


@click.command("add")
@click.option("--product", "product_id", required=True, help="Parent product ID.")
@click.option("--name", required=True, help="Variant name.")
@_price_options
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--sort-order", default=0, show_default=True, type=int, help="Display position.")
@click.option("--inactive", is_flag=True, default=False, help="Create the variant disabled.")
@click.pass_obj
def variant_add(store, product_id, name, price, price_ngn, price_ghs, stock, sort_order, inactive) -> None:
    """Add a variant to a product."""
    handler = AddVariantHandler(store)

    try:
        variant = handler.handle(
            product_id=product_id,
            name=name,
            price=price,
            price_ngn=price_ngn,
            price_ghs=price_ghs,
            stock=stock,
            sort_order=sort_order,
            is_active=not inactive,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Variant #{variant.id} '{variant.name}' added to product #{product_id}")


@click.command("update")
@click.option("--id", "item_id", required=True, help="Variant ID.")
@_price_options
@click.option("--stock", default=None, type=int, help="Units in stock.")
@click.pass_obj
def variant_update(store, item_id, price, price_ngn, price_ghs, stock) -> None:
    """Update a variant's prices or stock."""
    _update(store, ResourceType.VARIANTS, item_id, price, price_ngn, price_ghs, stock)


def _update(store, resource, item_id, price, price_ngn, price_ghs, stock) -> None:
    handler = UpdateProductHandler(store, resource)

    try:
        handler.handle(
            item_id, price=price, price_ngn=price_ngn, price_ghs=price_ghs, stock=stock
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{resource.value} #{item_id} updated")
