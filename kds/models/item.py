"""
SQLAlchemy Item model
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, CheckConstraint
from sqlalchemy.sql import func

from kds.database import Base


class Item(Base):
    """Menu item database model"""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    code = Column(String(100), nullable=False, default="")
    name = Column(String(255), nullable=False, index=True)
    price = Column(Float, nullable=False, default=0)
    category = Column(String(100), nullable=False, default="", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_non_negative'),
    )

    def __repr__(self):
        return f"<Item(id={self.id}, name='{self.name}', price={self.price})>"
