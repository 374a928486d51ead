from .order_repository import InMemoryOrderRepository

__all__ = ["InMemoryOrderRepository"]
