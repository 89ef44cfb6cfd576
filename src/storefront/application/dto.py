"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and the application layer without
exposing domain objects (which stores may share through the cache).
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.category import Category
from storefront.domain.model.customer import Customer
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.review import Review


@dataclass(frozen=True)
class PurchaseSpec:
    """Input: one checkout, as entered by the buyer."""

    product_id: str
    quantity: int
    first_name: str
    last_name: str
    email: str
    country: str
    city: str
    postal_code: str
    phone: str = ""


@dataclass(frozen=True)
class CategoryDTO:
    id: str
    name: str
    description: str


@dataclass(frozen=True)
class CategoryPageDTO:
    items: list[CategoryDTO]
    total: int


@dataclass(frozen=True)
class CustomerDTO:
    id: str
    name: str
    email: str
    phone: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: str  # formatted, e.g. "$15.00"
    stock_quantity: int
    category_id: str | None


@dataclass(frozen=True)
class ProductPageDTO:
    items: list[ProductDTO]
    total: int
    page: int
    page_size: int

    @property
    def page_count(self) -> int:
        return max(1, -(-self.total // self.page_size))


@dataclass(frozen=True)
class OrderDTO:
    id: str
    customer_email: str | None
    product_name: str
    quantity: int
    unit_price: str
    total: str
    order_date: str
    ship_to: str


@dataclass(frozen=True)
class OrderHistoryDTO:
    orders: list[OrderDTO]
    total: int


@dataclass(frozen=True)
class ReviewDTO:
    product_id: str
    rating: int
    comment: str
    created_at: str


@dataclass(frozen=True)
class ReviewPageDTO:
    reviews: list[ReviewDTO]
    total: int


# --- Mapping --------------------------------------------------------------------


def category_to_dto(category: Category) -> CategoryDTO:
    return CategoryDTO(id=str(category.id), name=category.name, description=category.description)


def customer_to_dto(customer: Customer) -> CustomerDTO:
    return CustomerDTO(
        id=str(customer.id), name=customer.full_name, email=customer.email, phone=customer.phone
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=str(product.price),
        stock_quantity=product.stock_quantity,
        category_id=str(product.category_id) if product.category_id else None,
    )


def order_to_dto(order: Order, customer_email: str | None) -> OrderDTO:
    # Orders placed through the store carry exactly one line.
    line = order.items[0] if order.items else None
    return OrderDTO(
        id=str(order.id),
        customer_email=customer_email,
        product_name=line.product_name if line else "",
        quantity=line.quantity.value if line else 0,
        unit_price=str(line.unit_price) if line else "",
        total=str(order.total_amount),
        order_date=order.order_date.strftime("%Y-%m-%d %H:%M UTC"),
        ship_to=f"{order.shipping_city}, {order.shipping_postal_code}, {order.shipping_country}",
    )


def review_to_dto(review: Review) -> ReviewDTO:
    return ReviewDTO(
        product_id=str(review.product_id),
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
