"""Repository interfaces."""

from .order_repository import OrderRepository, admit_order, apply_changes

__all__ = ["OrderRepository", "admit_order", "apply_changes"]
