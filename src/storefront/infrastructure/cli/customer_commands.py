"""CLI commands for customers."""

from __future__ import annotations

import click

from storefront.application.update_customer import UpdateCustomerHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


@click.command("update")
@click.option("--email", required=True, help="Email the customer ordered with.")
@click.option("--first-name", default=None)
@click.option("--last-name", default=None)
@click.option("--phone", default=None)
@click.pass_obj
def customer_update(
    container: Container,
    email: str,
    first_name: str | None,
    last_name: str | None,
    phone: str | None,
) -> None:
    """Change a customer's name or phone number."""
    handler = UpdateCustomerHandler(customer_store=container.customer_store)

    try:
        dto = handler.handle(email, first_name=first_name, last_name=last_name, phone=phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {dto.email} updated: {dto.name}  {dto.phone}".rstrip())
