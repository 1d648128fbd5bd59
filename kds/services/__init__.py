"""
Services package
"""
from kds.services.item_service import ItemService
from kds.services.order_service import OrderService

__all__ = ["ItemService", "OrderService"]
