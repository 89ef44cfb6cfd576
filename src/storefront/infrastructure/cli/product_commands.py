"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductDTO
from storefront.application.restock_product import RestockProductHandler
from storefront.application.search_products import SearchProductsHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.name}  (id={dto.id})")
    click.echo(f"  Price: {dto.price}   Stock: {dto.stock_quantity}")
    if dto.description:
        click.echo(f"  {dto.description}")


@click.command("add")
@click.option("--name", required=True, help="Product name (unique).")
@click.option("--price", required=True, help="Unit price, e.g. 19.99.")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--description", default="", help="Optional description.")
@click.option("--category", "category_name", default=None, help="Category name.")
@click.pass_obj
def product_add(
    container: Container,
    name: str,
    price: str,
    stock: int,
    description: str,
    category_name: str | None,
) -> None:
    """Add a product to the catalog."""
    handler = AddProductHandler(
        product_store=container.product_store,
        category_store=container.category_store,
    )

    try:
        dto = handler.handle(
            name=name,
            price=price,
            stock_quantity=stock,
            description=description,
            category_name=category_name,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{dto.name}' added  (id={dto.id})")


@click.command("list")
@click.option("--name", default=None, help="Name fragment to search for.")
@click.option("--category", "category_name", default=None, help="Category name.")
@click.option("--page", default=1, show_default=True, type=int)
@click.pass_obj
def product_list(container: Container, name: str | None, category_name: str | None, page: int) -> None:
    """List or search products."""
    handler = SearchProductsHandler(
        product_store=container.product_store,
        category_store=container.category_store,
    )

    try:
        result = handler.handle(
            name=name,
            category_name=category_name,
            page=page,
            page_size=container.settings.page_size,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No products found.")
        return

    click.echo(f"{'Product':<24} {'Price':>10} {'Stock':>7}  ID")
    click.echo("-" * 80)
    for dto in result.items:
        click.echo(f"{dto.name:<24} {dto.price:>10} {dto.stock_quantity:>7}  {dto.id}")
    click.echo(f"\nPage {result.page}/{result.page_count}, {result.total} product(s)")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New unit price.")
@click.option("--description", default=None, help="New description.")
@click.option("--category", "category_name", default=None, help="New category name.")
@click.pass_obj
def product_update(
    container: Container,
    product_id: str,
    price: str | None,
    description: str | None,
    category_name: str | None,
) -> None:
    """Update a product (existing orders keep their price)."""
    handler = UpdateProductHandler(
        product_store=container.product_store,
        category_store=container.category_store,
    )

    try:
        dto = handler.handle(
            product_id,
            price=price,
            description=description,
            category_name=category_name,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
@click.pass_obj
def product_restock(container: Container, product_id: str, quantity: int) -> None:
    """Add units to a product's stock."""
    handler = RestockProductHandler(product_store=container.product_store)

    try:
        dto = handler.handle(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"'{dto.name}' restocked, {dto.stock_quantity} in stock")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="Delete this product?")
@click.pass_obj
def product_delete(container: Container, product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = DeleteProductHandler(product_store=container.product_store)

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")
