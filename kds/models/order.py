"""
SQLAlchemy Order model
"""
import json
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean
from sqlalchemy.sql import func

from kds.database import Base


class OrderStatus(str, enum.Enum):
    """Order status workflow"""
    PLACED = "placed"
    PREPARING = "preparing"
    READY = "ready"
    BILLED = "billed"
    ARCHIVED = "archived"


ORDER_STATUSES = tuple(s.value for s in OrderStatus)


class Order(Base):
    """Order database model"""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    table_no = Column(String(50), nullable=False, index=True)
    items_json = Column(Text, nullable=False, default="[]")  # JSON list of opaque line items
    special_requests = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default=OrderStatus.PLACED.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    archived = Column(Boolean, nullable=False, default=False, index=True)

    @property
    def items(self) -> list:
        return json.loads(self.items_json or "[]")

    @items.setter
    def items(self, value: list) -> None:
        self.items_json = json.dumps(value)

    def __repr__(self):
        return f"<Order(id={self.id}, table_no='{self.table_no}', status='{self.status}', archived={self.archived})>"
