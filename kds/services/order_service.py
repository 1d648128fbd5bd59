"""
Order Service - Business Logic Layer
"""
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from kds.models.order import Order
from kds.publishers.base import EventPublisher
from kds.repositories.order_repository import OrderRepository
from kds.schemas import realtime
from kds.schemas.order import OrderResponse

logger = logging.getLogger(__name__)


def serialize_order(order: Order) -> Dict[str, Any]:
    """Full JSON-ready representation used for responses and events"""
    return OrderResponse.model_validate(order).model_dump(mode="json")


class OrderService:
    """
    Service layer for the order lifecycle

    Every mutating method publishes exactly one event carrying the
    post-mutation order, and only after the repository commit returned.
    Repository errors propagate before anything is published.
    """

    def __init__(self, db: Session, publisher: EventPublisher):
        self.repository = OrderRepository(db)
        self.publisher = publisher

    def list_active(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """Active orders, newest first, with items expanded"""
        return [serialize_order(o) for o in self.repository.list_active(status)]

    def place_order(self, table_no: str, items: Any, special_requests: Optional[str] = None) -> Dict[str, Any]:
        """
        Create an order and broadcast ``order:placed``

        Returns:
            The created order
        """
        order = self.repository.create(table_no, items, special_requests)
        data = serialize_order(order)
        # Echo the caller's items rather than the stored JSON
        data["items"] = items
        logger.info(f"Order #{order.id} placed for table {order.table_no} ({len(items)} item(s))")
        self._publish(realtime.ORDER_PLACED, data)
        return data

    def add_items(self, table_no: str, items: Any, special_requests: Optional[str] = None) -> Dict[str, Any]:
        """Append items to the table's active order and broadcast ``order:items-added``"""
        order = self.repository.append_items(table_no, items, special_requests)
        data = serialize_order(order)
        logger.info(f"Order #{order.id} for table {table_no}: {len(items)} item(s) added")
        self._publish(realtime.ORDER_ITEMS_ADDED, data)
        return data

    def change_status(self, order_id: int, status: Optional[str]) -> Dict[str, Any]:
        """Set order status and broadcast ``order:status-changed``"""
        order = self.repository.set_status(order_id, status)
        data = serialize_order(order)
        logger.info(f"Order #{order.id} status -> {order.status}")
        self._publish(realtime.ORDER_STATUS_CHANGED, data)
        return data

    def bill(self, order_id: int) -> Dict[str, Any]:
        """Bill and archive the order, broadcast ``order:billed``"""
        order = self.repository.bill(order_id)
        data = serialize_order(order)
        logger.info(f"Order #{order.id} billed")
        self._publish(realtime.ORDER_BILLED, data)
        return data

    def _publish(self, event: str, payload: Any) -> None:
        try:
            self.publisher.publish(event, payload)
        except Exception as e:
            # The write is committed; a failed broadcast must not fail the request
            logger.warning(f"Failed to publish {event}: {e}")
