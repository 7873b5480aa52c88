"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from shopcore.application.dto import CustomerData, OrderDTO, to_order_dto
from shopcore.application.place_order import OrderPlacementError
from shopcore.application.quote_cart import QuoteCartHandler
from shopcore.application.resources import ResourceType
from shopcore.application.show_resource import ShowResourceHandler
from shopcore.application.update_order import UpdateOrderStatusHandler
from shopcore.domain.exceptions import DomainException, EntityNotFoundError, ValidationError
from shopcore.domain.model.cart import Cart
from shopcore.domain.model.catalog import CatalogItem
from shopcore.domain.model.currency import currency_for_country, normalize_currency
from shopcore.domain.model.order import OrderStatus
from shopcore.domain.model.value_objects import Address
from shopcore.infrastructure.bootstrap import place_order_handler, price_resolver


def _parse_items(raw: str) -> list[tuple[str, int]]:
    """Parse 'id1:3,id2:5' into [(item_id, quantity), ...]."""
    specs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ItemId:Quantity'."
            )
        item_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for item '{item_id}'."
            )
        specs.append((item_id.strip(), qty))
    return specs


def _load_item(show: ShowResourceHandler, item_id: str) -> CatalogItem:
    """An item id names either a product or one of its variants."""
    try:
        return show.handle(ResourceType.PRODUCTS, item_id)
    except EntityNotFoundError:
        pass
    variant = show.handle(ResourceType.VARIANTS, item_id)
    if not variant.is_active:
        raise ValidationError(f"Variant '{item_id}' is not available")
    return variant


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo(f"Ship to:  {dto.shipping_address or '-'}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Item':<38} {'Qty':>5} {'Price':>12} {'Total':>14}")
    click.echo(f"  {'-'*72}")
    for item in dto.items:
        click.echo(
            f"  {item.variant_id or item.product_id:<38} {item.quantity:>5} "
            f"{item.unit_price:>12} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*72}")
    click.echo(f"  {'Order Total':<44} {dto.total:>27}")


@click.command("place")
@click.option("--email", required=True, help="Customer e-mail address.")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", default="", help="Customer phone number.")
@click.option("--street", default="", help="Shipping street.")
@click.option("--city", default="", help="Shipping city.")
@click.option("--state", default="", help="Shipping state.")
@click.option("--zip", "zip_code", default="", help="Shipping postal code.")
@click.option("--country", default="", help="Shipping country code (e.g. NG).")
@click.option("--items", required=True, help="Items as 'ItemId:Qty,ItemId:Qty' (product or variant IDs).")
@click.option("--currency", default=None, help="Checkout currency; defaults to the country's.")
@click.option("--payment-method", required=True, help="Payment method, e.g. 'card'.")
@click.option("--idempotency-key", default=None, help="Key that makes retries return the same order.")
@click.pass_obj
def order_place(
    store,
    email: str,
    name: str,
    phone: str,
    street: str,
    city: str,
    state: str,
    zip_code: str,
    country: str,
    items: str,
    currency: str | None,
    payment_method: str,
    idempotency_key: str | None,
) -> None:
    """Check out a cart: resolve the customer, then create the order and its items."""
    specs = _parse_items(items)
    show = ShowResourceHandler(store)

    try:
        code = normalize_currency(currency) if currency else currency_for_country(country)
        cart = Cart()
        for item_id, qty in specs:
            cart.add(_load_item(show, item_id), qty)
        quote = QuoteCartHandler(price_resolver()).handle(cart, code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    customer = CustomerData(
        email=email,
        name=name,
        phone=phone,
        address=Address(street=street, city=city, state=state, zip_code=zip_code, country=country),
    )

    try:
        order = place_order_handler(store).handle(
            customer=customer,
            items=quote.items,
            total=quote.total,
            payment_method=payment_method,
            idempotency_key=idempotency_key,
        )
    except OrderPlacementError as exc:
        raise click.ClickException(f"[{exc.kind.value}] {exc}")

    _display_order(to_order_dto(order))


def display_order(order) -> None:
    _display_order(to_order_dto(order))


@click.command("set-status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="New order status.",
)
@click.pass_obj
def order_set_status(store, order_id: str, status: str) -> None:
    """Move an order to a new status (delivered and cancelled are final)."""
    try:
        order = UpdateOrderStatusHandler(store).handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} is now {order.status.value}.")
