"""CLI commands for orders."""

from __future__ import annotations

import click

from storefront.application.dto import PurchaseSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.purchase_history import PurchaseHistoryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


@click.command("place")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to buy.")
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option("--email", required=True, help="Identifies the customer.")
@click.option("--phone", default="")
@click.option("--country", required=True, help="Shipping country.")
@click.option("--city", required=True, help="Shipping city.")
@click.option("--postal-code", required=True, help="Shipping postal code.")
@click.pass_obj
def order_place(
    container: Container,
    product_id: str,
    quantity: int,
    first_name: str,
    last_name: str,
    email: str,
    phone: str,
    country: str,
    city: str,
    postal_code: str,
) -> None:
    """Place an order for one product."""
    spec = PurchaseSpec(
        product_id=product_id,
        quantity=quantity,
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone=phone,
        country=country,
        city=city,
        postal_code=postal_code,
    )
    handler = PlaceOrderHandler(order_store=container.order_store)

    try:
        dto = handler.handle(spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} placed")
    click.echo(f"  {dto.quantity} x {dto.product_name} @ {dto.unit_price} = {dto.total}")
    click.echo(f"  Ship to: {dto.ship_to}")


@click.command("history")
@click.option("--page", default=1, show_default=True, type=int)
@click.pass_obj
def order_history(container: Container, page: int) -> None:
    """Show placed orders, newest first."""
    handler = PurchaseHistoryHandler(
        order_store=container.order_store,
        customer_store=container.customer_store,
    )
    page_size = container.settings.page_size

    try:
        history = handler.handle(limit=page_size, offset=(page - 1) * page_size)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not history.orders:
        click.echo("No orders found.")
        return

    click.echo(f"  {'Date':<20} {'Customer':<28} {'Product':<20} {'Qty':>5} {'Total':>10}")
    click.echo(f"  {'-'*87}")
    for dto in history.orders:
        click.echo(
            f"  {dto.order_date:<20} {dto.customer_email or '-':<28} "
            f"{dto.product_name:<20} {dto.quantity:>5} {dto.total:>10}"
        )
    click.echo(f"\n{history.total} order(s)")
