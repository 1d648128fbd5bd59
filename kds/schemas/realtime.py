"""
Realtime channel event names and frame schema
"""
from pydantic import BaseModel
from typing import Any


# Server -> all subscribers
ITEM_ADDED = "item:added"
ITEMS_BULK_UPDATE = "items:bulk-update"
ORDER_PLACED = "order:placed"
ORDER_ITEMS_ADDED = "order:items-added"
ORDER_STATUS_CHANGED = "order:status-changed"
ORDER_BILLED = "order:billed"

# Client -> server snapshot requests and their replies
REFRESH_ORDERS = "refresh:orders"
REFRESH_ITEMS = "refresh:items"
ORDERS_REFRESH = "orders:refresh"
ITEMS_REFRESH = "items:refresh"


class RealtimeMessage(BaseModel):
    """A single WebSocket frame: {"event": ..., "data": ...}"""
    event: str
    data: Any = None
