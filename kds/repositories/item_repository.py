"""
Item Repository - Data Access Layer
"""
import math
from typing import Dict, Iterable, List, Optional
from sqlalchemy import desc

from kds.exceptions import ValidationError
from kds.models.item import Item
from kds.repositories.base import BaseRepository


class ItemRepository(BaseRepository):
    """Repository for menu items"""

    def get_all(self) -> List[Item]:
        """Get all items, newest first"""
        return self.db.query(Item).order_by(desc(Item.id)).all()

    def latest(self, limit: int = 200) -> List[Item]:
        """Get the newest items"""
        return self.db.query(Item).order_by(desc(Item.id)).limit(limit).all()

    def create(
        self,
        code: Optional[str],
        name: Optional[str],
        price: Optional[float] = None,
        category: Optional[str] = None
    ) -> Item:
        """
        Create new item

        Raises:
            ValidationError: If name is empty or price is negative or not finite
        """
        if not name:
            raise ValidationError("name required")
        if price is not None and (not math.isfinite(price) or price < 0):
            raise ValidationError("price must be >= 0")

        item = Item(code=code or "", name=name, price=price or 0, category=category or "")
        self._commit(item)
        return item

    def bulk_insert(self, rows: Iterable[Dict]) -> int:
        """
        Insert many items in a single commit

        Args:
            rows: Dicts with code, name, price, category

        Returns:
            Number of rows inserted
        """
        items = [
            Item(
                code=row.get("code") or "",
                name=row["name"],
                price=row.get("price") or 0,
                category=row.get("category") or ""
            )
            for row in rows
        ]
        if items:
            self._commit(*items)
        return len(items)
