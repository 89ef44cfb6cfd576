"""Relational schema (SQLAlchemy Core).

Table and column names follow the storefront's existing database:
``product``, ``category``, ``customer``, ``orders``, ``order_item``,
``review``.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

category = Table(
    "category",
    metadata,
    Column("category_id", Uuid, primary_key=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("description", Text, nullable=False, default=""),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

product = Table(
    "product",
    metadata,
    Column("product_id", Uuid, primary_key=True),
    Column("name", String(200), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("price", Numeric(10, 2), nullable=False),
    Column("stock_quantity", Integer, nullable=False),
    Column(
        "category_id",
        Uuid,
        ForeignKey("category.category_id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("stock_quantity >= 0", name="ck_product_stock_non_negative"),
    CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
)

customer = Table(
    "customer",
    metadata,
    Column("customer_id", Uuid, primary_key=True),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("phone", String(50), nullable=False, default=""),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

orders = Table(
    "orders",
    metadata,
    Column("order_id", Uuid, primary_key=True),
    Column("customer_id", Uuid, ForeignKey("customer.customer_id"), nullable=True),
    Column("order_date", DateTime(timezone=True), nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("shipping_country", String(100), nullable=False),
    Column("shipping_city", String(100), nullable=False),
    Column("shipping_postal_code", String(20), nullable=False),
)

# product_id / product_name are a snapshot: deleting a product keeps history.
order_item = Table(
    "order_item",
    metadata,
    Column("order_item_id", Uuid, primary_key=True),
    Column(
        "order_id",
        Uuid,
        ForeignKey("orders.order_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("product_id", Uuid, nullable=False),
    Column("product_name", String(200), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("price_at_purchase", Numeric(10, 2), nullable=False),
)

review = Table(
    "review",
    metadata,
    Column("review_id", Uuid, primary_key=True),
    Column(
        "product_id",
        Uuid,
        ForeignKey("product.product_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("customer_id", Uuid, ForeignKey("customer.customer_id"), nullable=True),
    Column("rating", Integer, nullable=False),
    Column("comment", Text, nullable=False, default=""),
    Column("created_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
)


def create_schema(engine: Engine) -> None:
    """Create any missing tables. Existing tables are left alone."""
    metadata.create_all(engine)


def as_utc(value: datetime) -> datetime:
    """Backends without timezone support hand back naive UTC datetimes."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
