"""
Item Service - Business Logic Layer
"""
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from kds.config import settings
from kds.models.item import Item
from kds.publishers.base import EventPublisher
from kds.repositories.item_repository import ItemRepository
from kds.schemas import realtime
from kds.schemas.item import ItemCreate, ItemResponse
from kds.services.csv_import import parse_menu_csv

logger = logging.getLogger(__name__)


def serialize_item(item: Item) -> Dict[str, Any]:
    return ItemResponse.model_validate(item).model_dump(mode="json")


class ItemService:
    """Service layer for menu items"""

    def __init__(self, db: Session, publisher: EventPublisher):
        self.repository = ItemRepository(db)
        self.publisher = publisher

    def list_items(self) -> List[Dict[str, Any]]:
        """All items, newest first"""
        return [serialize_item(i) for i in self.repository.get_all()]

    def create_item(self, item_data: ItemCreate) -> Dict[str, Any]:
        """Create an item and broadcast ``item:added``"""
        item = self.repository.create(
            code=item_data.code,
            name=item_data.name,
            price=item_data.price,
            category=item_data.category
        )
        data = serialize_item(item)
        logger.info(f"Item #{item.id} '{item.name}' added")
        self._publish(realtime.ITEM_ADDED, data)
        return data

    def import_csv(self, content: bytes, filename: Optional[str] = None) -> int:
        """
        Bulk-insert items parsed from a menu CSV

        Broadcasts ``items:bulk-update`` with the newest items afterwards.

        Returns:
            Number of items inserted

        Raises:
            CsvImportError: If the file cannot be parsed (nothing is inserted)
            StoreError: If the insert fails
        """
        rows = parse_menu_csv(content)
        inserted = self.repository.bulk_insert(rows)
        logger.info(f"Imported {inserted} item(s) from {filename or 'upload'}")

        latest = [serialize_item(i) for i in self.repository.latest(settings.BULK_UPDATE_LIMIT)]
        self._publish(realtime.ITEMS_BULK_UPDATE, latest)
        return inserted

    def _publish(self, event: str, payload: Any) -> None:
        try:
            self.publisher.publish(event, payload)
        except Exception as e:
            logger.warning(f"Failed to publish {event}: {e}")
