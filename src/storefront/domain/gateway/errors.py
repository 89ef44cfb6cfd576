"""Errors raised by entity gateways.

Gateways report storage failures with these types only; stores translate
them into store-level errors after rolling back.
"""

from __future__ import annotations


class GatewayError(Exception):
    """A gateway call failed against the underlying storage."""


class ConstraintViolationError(GatewayError):
    """A unique or foreign-key constraint rejected the write."""
