"""Custom exception hierarchy for Pancake Lab."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import OrderStatus


class PancakeLabError(Exception):
    """Base exception for all Pancake Lab errors."""


# --- Configuration ---
class ConfigError(PancakeLabError):
    """Invalid or missing configuration."""


# --- Caller errors ---
class InvalidArgument(PancakeLabError, ValueError):
    """Malformed or missing input (empty ids, bad formats, incompatible ingredient)."""


class NotFound(PancakeLabError, LookupError):
    """Referenced order or pancake does not exist."""


class IllegalState(PancakeLabError):
    """Operation not permitted in the order's current status."""

    def __init__(
        self,
        message: str,
        *,
        reason: str = "wrong_status",
        status: OrderStatus | None = None,
    ) -> None:
        self.reason = reason
        self.status = status
        super().__init__(message)


# --- Infrastructure ---
class Unavailable(PancakeLabError):
    """Store or lock infrastructure failure."""
