import click

from storefront.infrastructure.bootstrap import Container, build_container
from storefront.infrastructure.cli.category_commands import (
    category_add,
    category_delete,
    category_list,
    category_update,
)
from storefront.infrastructure.cli.customer_commands import customer_update
from storefront.infrastructure.cli.order_commands import order_history, order_place
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_restock,
    product_update,
)
from storefront.infrastructure.cli.review_commands import review_add, review_list
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront: catalog, orders and reviews"""
    settings = Settings()
    configure_logging(settings.log_level, json_output=settings.log_json)

    container = build_container(settings)
    ctx.obj = container
    ctx.call_on_close(container.close)


@cli.command("init-db")
@click.pass_obj
def init_db(container: Container) -> None:
    """Create the database tables."""
    container.init_schema()
    click.echo(f"Database ready: {container.engine.url.render_as_string(hide_password=True)}")


@cli.group()
def category() -> None:
    """Manage categories."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def order() -> None:
    """Place and list orders."""


@cli.group()
def review() -> None:
    """Manage product reviews."""


# Register subcommands
category.add_command(category_add)
category.add_command(category_delete)
category.add_command(category_list)
category.add_command(category_update)
customer.add_command(customer_update)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_update)
order.add_command(order_history)
order.add_command(order_place)
review.add_command(review_add)
review.add_command(review_list)
