"""Outward API: input validation facade and read-side views."""

from .facade import PancakeLab, parse_category, parse_status
from .views import OrderView, PancakeView

__all__ = ["PancakeLab", "OrderView", "PancakeView", "parse_category", "parse_status"]
