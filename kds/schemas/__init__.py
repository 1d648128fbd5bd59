"""
Schemas package
"""
from kds.schemas.item import (
    ItemCreate,
    ItemResponse,
    ItemCreatedResponse,
    CsvImportResponse,
    ErrorResponse
)
from kds.schemas.order import (
    OrderCreate,
    OrderAddItems,
    OrderStatusUpdate,
    OrderResponse,
    OrderCreatedResponse,
    OrderItemsAddedResponse,
    AckResponse
)
from kds.schemas.realtime import RealtimeMessage

__all__ = [
    "ItemCreate",
    "ItemResponse",
    "ItemCreatedResponse",
    "CsvImportResponse",
    "ErrorResponse",
    "OrderCreate",
    "OrderAddItems",
    "OrderStatusUpdate",
    "OrderResponse",
    "OrderCreatedResponse",
    "OrderItemsAddedResponse",
    "AckResponse",
    "RealtimeMessage"
]
