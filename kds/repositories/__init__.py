"""
Repositories package
"""
from kds.repositories.item_repository import ItemRepository
from kds.repositories.order_repository import OrderRepository

__all__ = ["ItemRepository", "OrderRepository"]
