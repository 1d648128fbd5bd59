"""
Models package
"""
from kds.models.item import Item
from kds.models.order import Order, OrderStatus, ORDER_STATUSES

__all__ = ["Item", "Order", "OrderStatus", "ORDER_STATUSES"]
