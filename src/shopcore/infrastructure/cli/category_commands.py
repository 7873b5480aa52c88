"""CLI commands for categories and subcategories."""

from __future__ import annotations

import click

from shopcore.application.add_category import AddCategoryHandler, AddSubcategoryHandler
from shopcore.domain.exceptions import DomainException


@click.command("add")
@click.option("--name", required=True, help="Category name.")
@click.option("--description", default="", help="Category description.")
@click.pass_obj
def category_add(store, name: str, description: str) -> None:
    """Add a category."""
    try:
        category = AddCategoryHandler(store).handle(name=name, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{category.id} '{category.name}' added")


@click.command("add")
@click.option("--category", "category_id", required=True, help="Parent category ID.")
@click.option("--name", required=True, help="Subcategory name.")
@click.option("--description", default="", help="Subcategory description.")
@click.pass_obj
def subcategory_add(store, category_id: str, name: str, description: str) -> None:
    """Add a subcategory under an existing category."""
    try:
        sub = AddSubcategoryHandler(store).handle(
            name=name, category_id=category_id, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Subcategory #{sub.id} '{sub.name}' added")
