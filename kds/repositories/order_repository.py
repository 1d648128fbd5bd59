"""
Order Repository - Data Access Layer
"""
from typing import Any, List, Optional
from sqlalchemy import desc

from kds.exceptions import NotFoundError, ValidationError
from kds.models.order import Order, OrderStatus, ORDER_STATUSES
from kds.repositories.base import BaseRepository


class OrderRepository(BaseRepository):
    """Repository for the order lifecycle"""

    def _newest_first(self, query):
        # created_at has second resolution on SQLite; id breaks ties
        return query.order_by(desc(Order.created_at), desc(Order.id))

    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Get order by ID"""
        return self.db.query(Order).filter(Order.id == order_id).first()

    def list_active(self, status: Optional[str] = None) -> List[Order]:
        """
        Get all non-archived orders, newest first

        Args:
            status: Optional exact status to filter on. Unknown values match nothing.
        """
        query = self.db.query(Order).filter(Order.archived.is_(False))
        if status:
            query = query.filter(Order.status == status)
        return self._newest_first(query).all()

    def get_active_for_table(self, table_no: str) -> Optional[Order]:
        """Get the most recently created active order for a table"""
        query = self.db.query(Order).filter(
            Order.table_no == table_no,
            Order.archived.is_(False)
        )
        return self._newest_first(query).first()

    def create(self, table_no: str, items: Any, special_requests: Optional[str] = "") -> Order:
        """
        Place a new order

        Args:
            table_no: Table identifier (required)
            items: List of line items, may be empty
            special_requests: Free-text notes

        Returns:
            Created order

        Raises:
            ValidationError: If table_no is empty or items is not a list
        """
        if not table_no or not isinstance(items, list):
            raise ValidationError("table_no and items[] required")

        order = Order(
            table_no=table_no,
            special_requests=special_requests or "",
            status=OrderStatus.PLACED.value,
            archived=False
        )
        order.items = items
        self._commit(order)
        return order

    def append_items(self, table_no: str, items: Any, special_requests: Optional[str] = None) -> Order:
        """
        Append items to the table's latest active order and send it back to the kitchen

        Reads the stored items, concatenates and writes the whole list back.
        Two concurrent appends to the same order are last-write-wins.

        Raises:
            ValidationError: If items is not a non-empty list
            NotFoundError: If the table has no active order
        """
        if not isinstance(items, list) or len(items) == 0:
            raise ValidationError("items[] required")

        order = self.get_active_for_table(table_no)
        if not order:
            raise NotFoundError("no active order for this table")

        order.items = order.items + items
        if special_requests:
            order.special_requests = (order.special_requests or "") + "; " + special_requests
        order.status = OrderStatus.PLACED.value
        self._commit(order)
        return order

    def set_status(self, order_id: int, status: Optional[str]) -> Order:
        """
        Change order status

        Only "archived" archives the order; "billed" through this path does not.

        Raises:
            ValidationError: If status is not a recognized value
            NotFoundError: If the order does not exist
        """
        if status not in ORDER_STATUSES:
            raise ValidationError("invalid status")

        order = self.get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order with id={order_id} not found")

        order.status = status
        if status == OrderStatus.ARCHIVED.value:
            order.archived = True
        self._commit(order)
        return order

    def bill(self, order_id: int) -> Order:
        """
        Mark order billed and archive it

        Raises:
            NotFoundError: If the order does not exist
        """
        order = self.get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order with id={order_id} not found")

        order.status = OrderStatus.BILLED.value
        order.archived = True
        self._commit(order)
        return order
