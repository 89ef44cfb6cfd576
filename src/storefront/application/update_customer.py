"""Application service: Update Customer use case."""

from __future__ import annotations

import dataclasses

from storefront.application.dto import CustomerDTO, customer_to_dto
from storefront.domain.exceptions import CustomerNotFoundError, ValidationError
from storefront.store.customer_store import CustomerStore


class UpdateCustomerHandler:

    def __init__(self, customer_store: CustomerStore) -> None:
        self._customer_store = customer_store

    def handle(
        self,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> CustomerDTO:
        """Change the contact details of the customer known by ``email``."""
        if first_name is None and last_name is None and phone is None:
            raise ValidationError("Nothing to update")

        cached = self._customer_store.find_by_email(email)
        if cached is None:
            raise CustomerNotFoundError(email)
        customer = dataclasses.replace(cached)

        customer.update_contact(first_name=first_name, last_name=last_name, phone=phone)
        self._customer_store.update_customer(customer)
        return customer_to_dto(customer)
