"""Generic list / show / delete commands shared by every resource group."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from shopcore.application.delete_resource import DeleteResourceHandler
from shopcore.application.list_resources import ListResourcesHandler
from shopcore.application.resources import ResourceType
from shopcore.application.show_resource import ShowResourceHandler
from shopcore.domain.exceptions import DomainException
from shopcore.domain.model.catalog import CatalogItem, Category, Subcategory
from shopcore.domain.model.customer import Customer
from shopcore.domain.model.order import Order


def _price_cell(item: CatalogItem) -> str:
    return str(item.price) if item.base_price is not None else "-"


# resource -> (header, row renderer)
RENDERERS: dict[ResourceType, tuple[str, Callable[[Any], str]]] = {
    ResourceType.PRODUCTS: (
        f"{'ID':<38} {'Name':<24} {'Price':>12} {'Stock':>6}",
        lambda p: f"{p.id:<38} {p.name:<24} {_price_cell(p):>12} {p.stock:>6}",
    ),
    ResourceType.VARIANTS: (
        f"{'ID':<38} {'Name':<24} {'Price':>12} {'Stock':>6} {'Active':>6}",
        lambda v: (
            f"{v.id:<38} {v.name:<24} {_price_cell(v):>12} {v.stock:>6} "
            f"{'yes' if v.is_active else 'no':>6}"
        ),
    ),
    ResourceType.CATEGORIES: (
        f"{'ID':<38} {'Name':<24} Description",
        lambda c: f"{c.id:<38} {c.name:<24} {c.description}",
    ),
    ResourceType.SUBCATEGORIES: (
        f"{'ID':<38} {'Name':<24} {'Category':<38}",
        lambda s: f"{s.id:<38} {s.name:<24} {s.category_id:<38}",
    ),
    ResourceType.CUSTOMERS: (
        f"{'ID':<38} {'Name':<24} Email",
        lambda c: f"{c.id:<38} {c.name:<24} {c.email}",
    ),
    ResourceType.ORDERS: (
        f"{'ID':<38} {'Status':<11} {'Total':>14} Created",
        lambda o: (
            f"{o.id:<38} {o.status.value:<11} {str(o.total):>14} "
            f"{o.created_at.strftime('%Y-%m-%d %H:%M')}"
        ),
    ),
}


def _parse_filters(raw: tuple[str, ...]) -> dict[str, str]:
    """Parse ('status=pending', ...) into {column: value}."""
    filters: dict[str, str] = {}
    for pair in raw:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid filter '{pair}'. Expected 'column=value'.", param_hint="--filter"
            )
        column, value = pair.split("=", 1)
        filters[column.strip()] = value.strip()
    return filters


def make_list_command(resource: ResourceType) -> click.Command:
    header, render = RENDERERS[resource]

    @click.command("list")
    @click.option("--page", default=1, show_default=True, type=int, help="Page number (1-based).")
    @click.option("--limit", default=10, show_default=True, type=int, help="Rows per page.")
    @click.option("--search", default=None, help="Only rows matching this term.")
    @click.option("--filter", "filters", multiple=True, help="Column filter as 'column=value'.")
    @click.pass_obj
    def list_command(store, page: int, limit: int, search: str | None, filters: tuple[str, ...]) -> None:
        handler = ListResourcesHandler(store)
        try:
            result = handler.handle(
                resource, page=page, limit=limit, filters=_parse_filters(filters), search=search
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

        if not result.documents:
            click.echo(f"No {resource.value} found.")
        else:
            click.echo(header)
            click.echo("-" * len(header))
            for doc in result.documents:
                click.echo(render(doc))
        meta = result.meta
        click.echo(
            f"Page {meta.page}/{meta.total_pages}  ({result.total} total)  "
            f"prev={meta.previous_page or '-'}  next={meta.next_page or '-'}"
        )

    list_command.help = f"List {resource.value.replace('_', ' ')} page by page."
    return list_command


def make_show_command(resource: ResourceType, display: Callable[[Any], None] | None = None) -> click.Command:

    @click.command("show")
    @click.option("--id", "resource_id", required=True, help="Record ID.")
    @click.pass_obj
    def show_command(store, resource_id: str) -> None:
        try:
            record = ShowResourceHandler(store).handle(resource, resource_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))
        (display or _display_record)(record)

    show_command.help = f"Show one of the {resource.value.replace('_', ' ')}."
    return show_command


def make_delete_command(resource: ResourceType) -> click.Command:

    @click.command("delete")
    @click.option("--id", "resource_id", required=True, help="Record ID.")
    @click.pass_obj
    def delete_command(store, resource_id: str) -> None:
        try:
            DeleteResourceHandler(store).handle(resource, resource_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))
        click.echo(f"Deleted {resource.value} '{resource_id}'.")

    delete_command.help = f"Delete one of the {resource.value.replace('_', ' ')}."
    return delete_command


def _display_record(record: Any) -> None:
    if isinstance(record, CatalogItem):
        click.echo(f"{type(record).__name__} #{record.id}  '{record.name}'")
        click.echo(f"Base price: {_price_cell(record)}")
        for code, money in sorted(record.regional_prices.items()):
            click.echo(f"Price {code}:  {money}")
        click.echo(f"Stock:      {record.stock}")
        click.echo(f"Active:     {'yes' if record.is_active else 'no'}")
    elif isinstance(record, (Category, Subcategory)):
        click.echo(f"{type(record).__name__} #{record.id}  '{record.name}'")
        if isinstance(record, Subcategory):
            click.echo(f"Parent: {record.category_id}")
        click.echo(record.description)
    elif isinstance(record, Customer):
        click.echo(f"Customer #{record.id}  {record.name} <{record.email}>")
        if record.phone:
            click.echo(f"Phone:   {record.phone}")
        click.echo(f"Address: {', '.join(v for v in record.address.to_dict().values() if v)}")
    elif isinstance(record, Order):
        click.echo(f"Order #{record.id}  (status={record.status.value})  total {record.total}")
    else:
        click.echo(repr(record))
