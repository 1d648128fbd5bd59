"""
Order API endpoints
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from kds.database import get_db
from kds.publishers import get_event_publisher
from kds.publishers.base import EventPublisher
from kds.services.order_service import OrderService
from kds.schemas.item import ErrorResponse
from kds.schemas.order import (
    OrderCreate,
    OrderAddItems,
    OrderStatusUpdate,
    OrderResponse,
    OrderCreatedResponse,
    OrderItemsAddedResponse,
    AckResponse
)

router = APIRouter(prefix="/api/orders", tags=["orders"])

ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def get_order_service(
    db: Session = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher)
) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db, publisher)


@router.get("", response_model=List[OrderResponse], summary="List active orders")
def list_orders(
    status: Optional[str] = Query(None, description="Only orders with exactly this status"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve all non-archived orders, newest first

    - **status**: placed, preparing, ready, billed or archived (optional)
    """
    return service.list_active(status)


@router.post("", response_model=OrderCreatedResponse, responses=ERRORS, summary="Place order")
def place_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
):
    """
    Place a new order for a table

    - **table_no**: Table identifier (required)
    - **items**: List of line items (required, may be empty)
    - **special_requests**: Kitchen notes (optional)
    """
    order = service.place_order(order_data.table_no, order_data.items, order_data.special_requests)
    return OrderCreatedResponse(id=order["id"])


@router.post(
    "/{table_no}/add-items",
    response_model=OrderItemsAddedResponse,
    responses=ERRORS,
    summary="Add items to a table's active order"
)
def add_items(
    table_no: str,
    order_data: OrderAddItems,
    service: OrderService = Depends(get_order_service)
):
    """
    Append items to the most recent active order of a table

    The order goes back to **placed** so the new items reach the kitchen.
    """
    order = service.add_items(table_no, order_data.items, order_data.special_requests)
    return {"ok": True, "order": order}


@router.post("/{order_id}/status", response_model=AckResponse, responses=ERRORS, summary="Update order status")
def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Update order status

    - **status**: placed, preparing, ready, billed or archived.
      Only **archived** removes the order from the active list.
    """
    service.change_status(order_id, status_data.status)
    return AckResponse()


@router.post("/{order_id}/bill", response_model=AckResponse, responses=ERRORS, summary="Bill order")
def bill_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """Mark the order billed and archive it"""
    service.bill(order_id)
    return AckResponse()
