"""Translation of SQLAlchemy errors into gateway errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from storefront.domain.gateway.errors import ConstraintViolationError, GatewayError


@contextmanager
def translate_errors(message: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        raise ConstraintViolationError(message) from exc
    except SQLAlchemyError as exc:
        raise GatewayError(message) from exc
