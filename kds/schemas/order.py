"""
Pydantic schemas for order request/response validation

Request bodies are deliberately permissive: shape checks on ``table_no``,
``items`` and ``status`` happen in the repository so they surface as
``ValidationError`` (HTTP 400) with a readable message.
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Any, List, Optional
from datetime import datetime


class OrderCreate(BaseModel):
    """Schema for placing a new order"""
    table_no: Optional[str] = Field(None, description="Physical or logical table identifier")
    items: Optional[Any] = Field(None, description="List of line items (shape is not validated)")
    special_requests: Optional[str] = Field(None, description="Free-text kitchen notes")

    @field_validator("table_no", mode="before")
    @classmethod
    def coerce_table_no(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class OrderAddItems(BaseModel):
    """Schema for appending items to a table's active order"""
    items: Optional[Any] = Field(None, description="Non-empty list of line items")
    special_requests: Optional[str] = Field(None, description="Appended to existing notes with '; '")


class OrderStatusUpdate(BaseModel):
    """Schema for updating order status"""
    status: Optional[str] = Field(
        None,
        description="One of placed, preparing, ready, billed, archived"
    )


class OrderResponse(BaseModel):
    """Schema for order response (items expanded from storage)"""
    id: int
    table_no: str
    items: List[Any]
    special_requests: Optional[str] = ""
    status: str
    created_at: datetime
    archived: bool

    model_config = ConfigDict(from_attributes=True)


class OrderCreatedResponse(BaseModel):
    ok: bool = True
    id: int


class OrderItemsAddedResponse(BaseModel):
    ok: bool = True
    order: OrderResponse


class AckResponse(BaseModel):
    ok: bool = True
