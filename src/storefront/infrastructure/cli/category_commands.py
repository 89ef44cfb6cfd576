"""CLI commands for categories."""

from __future__ import annotations

import click

from storefront.application.create_category import CreateCategoryHandler
from storefront.application.delete_category import DeleteCategoryHandler
from storefront.application.list_categories import ListCategoriesHandler
from storefront.application.update_category import UpdateCategoryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--name", required=True, help="Category name (unique).")
@click.option("--description", default="", help="Optional description.")
@click.pass_obj
def category_add(container: Container, name: str, description: str) -> None:
    """Add a category."""
    handler = CreateCategoryHandler(category_store=container.category_store)

    try:
        dto = handler.handle(name=name, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category '{dto.name}' added  (id={dto.id})")


@click.command("list")
@click.option("--query", default=None, help="Only categories whose name contains this.")
@click.option("--page", default=1, show_default=True, type=int)
@click.pass_obj
def category_list(container: Container, query: str | None, page: int) -> None:
    """List categories."""
    handler = ListCategoriesHandler(category_store=container.category_store)
    page_size = container.settings.page_size

    try:
        result = handler.handle(query=query, limit=page_size, offset=(page - 1) * page_size)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No categories found.")
        return

    click.echo(f"{'Name':<24} {'ID':<36}  Description")
    click.echo("-" * 80)
    for dto in result.items:
        click.echo(f"{dto.name:<24} {dto.id:<36}  {dto.description}")
    click.echo(f"\n{result.total} categor{'y' if result.total == 1 else 'ies'}")


@click.command("update")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--name", default=None, help="New name (unique).")
@click.option("--description", default=None, help="New description.")
@click.pass_obj
def category_update(
    container: Container, category_id: str, name: str | None, description: str | None
) -> None:
    """Rename a category or change its description."""
    handler = UpdateCategoryHandler(category_store=container.category_store)

    try:
        dto = handler.handle(category_id, name=name, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category '{dto.name}' updated  (id={dto.id})")


@click.command("delete")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.confirmation_option(prompt="Delete this category? Its products become uncategorized.")
@click.pass_obj
def category_delete(container: Container, category_id: str) -> None:
    """Remove a category; its products are kept."""
    handler = DeleteCategoryHandler(category_store=container.category_store)

    try:
        handler.handle(category_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category {category_id} deleted.")
