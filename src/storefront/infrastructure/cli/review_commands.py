"""CLI commands for product reviews."""

from __future__ import annotations

import click

from storefront.application.add_review import AddReviewHandler, ShowReviewsHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--rating", required=True, type=int, help="1 to 5.")
@click.option("--comment", default="")
@click.option("--email", default=None, help="Reviewer's customer email.")
@click.pass_obj
def review_add(
    container: Container,
    product_id: str,
    rating: int,
    comment: str,
    email: str | None,
) -> None:
    """Review a product."""
    handler = AddReviewHandler(
        review_store=container.review_store,
        product_store=container.product_store,
        customer_store=container.customer_store,
    )

    try:
        dto = handler.handle(product_id, rating, comment, customer_email=email)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Review added ({dto.rating}/5)")


@click.command("list")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.pass_obj
def review_list(container: Container, product_id: str) -> None:
    """Show a product's reviews, newest first."""
    handler = ShowReviewsHandler(review_store=container.review_store)

    try:
        page = handler.handle(product_id, limit=container.settings.page_size)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not page.reviews:
        click.echo("No reviews yet.")
        return

    for dto in page.reviews:
        click.echo(f"[{dto.rating}/5] {dto.created_at}  {dto.comment}")
    click.echo(f"\n{page.total} review(s)")
