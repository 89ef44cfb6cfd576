"""Parsing of identifiers typed by users."""

from __future__ import annotations

from uuid import UUID

from storefront.domain.exceptions import ValidationError


def parse_id(raw: str, what: str) -> UUID:
    try:
        return UUID(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid {what} ID: {raw!r}") from exc
