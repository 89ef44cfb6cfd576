"""SQLAlchemy Core implementation of CustomerGateway."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection

from storefront.domain.gateway.customer_gateway import CustomerGateway
from storefront.domain.model.customer import Customer
from storefront.infrastructure.persistence.errors import translate_errors
from storefront.infrastructure.persistence.schema import as_utc, customer


class SqlCustomerGateway(CustomerGateway):

    def find_by_id(self, conn: Connection, customer_id: UUID) -> Customer | None:
        with translate_errors(f"Failed to find customer {customer_id}"):
            row = conn.execute(
                select(customer).where(customer.c.customer_id == customer_id)
            ).mappings().first()
        return self._to_domain(row) if row else None

    def find_by_email(self, conn: Connection, email: str) -> Customer | None:
        with translate_errors(f"Failed to find customer {email}"):
            row = conn.execute(
                select(customer).where(customer.c.email == email)
            ).mappings().first()
        return self._to_domain(row) if row else None

    def find_by_ids(self, conn: Connection, customer_ids: Iterable[UUID]) -> list[Customer]:
        ids = list(customer_ids)
        if not ids:
            return []
        with translate_errors("Failed to load customers"):
            rows = conn.execute(
                select(customer).where(customer.c.customer_id.in_(ids))
            ).mappings().all()
        return [self._to_domain(row) for row in rows]

    def save(self, conn: Connection, item: Customer) -> None:
        with translate_errors(f"Error saving customer {item.email}"):
            conn.execute(
                insert(customer).values(
                    customer_id=item.id,
                    first_name=item.first_name,
                    last_name=item.last_name,
                    email=item.email,
                    phone=item.phone,
                    created_at=item.created_at,
                )
            )

    def update(self, conn: Connection, item: Customer) -> bool:
        stmt = (
            update(customer)
            .where(customer.c.customer_id == item.id)
            .values(first_name=item.first_name, last_name=item.last_name, phone=item.phone)
        )
        with translate_errors(f"Error updating customer {item.id}"):
            return conn.execute(stmt).rowcount > 0

    @staticmethod
    def _to_domain(row: Mapping[str, Any]) -> Customer:
        return Customer(
            id=row["customer_id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            phone=row["phone"],
            created_at=as_utc(row["created_at"]),
        )
