"""
Menu item API endpoints
"""
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
from typing import List, Optional

from kds.database import get_db
from kds.exceptions import ValidationError
from kds.publishers import get_event_publisher
from kds.publishers.base import EventPublisher
from kds.services.item_service import ItemService
from kds.schemas.item import (
    ItemCreate,
    ItemResponse,
    ItemCreatedResponse,
    CsvImportResponse,
    ErrorResponse
)

router = APIRouter(prefix="/api/items", tags=["items"])


def get_item_service(
    db: Session = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher)
) -> ItemService:
    """Dependency to get ItemService instance"""
    return ItemService(db, publisher)


@router.get("", response_model=List[ItemResponse], summary="List items")
def list_items(service: ItemService = Depends(get_item_service)):
    """Retrieve all menu items, newest first"""
    return service.list_items()


@router.post(
    "",
    response_model=ItemCreatedResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Create item"
)
def create_item(
    item_data: ItemCreate,
    service: ItemService = Depends(get_item_service)
):
    """
    Create a menu item

    - **name**: Item name (required)
    - **code**, **category**: optional, default empty
    - **price**: optional, default 0
    """
    item = service.create_item(item_data)
    return ItemCreatedResponse(id=item["id"])


@router.post(
    "/upload-csv",
    response_model=CsvImportResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Import items from CSV"
)
def upload_csv(
    csv: Optional[UploadFile] = File(None, description="CSV with a header row"),
    service: ItemService = Depends(get_item_service)
):
    """
    Bulk-import menu items from a CSV upload (multipart field **csv**)

    Recognized headers: code, name/item, price, category (either case).
    """
    if csv is None:
        raise ValidationError("csv required")

    try:
        content = csv.file.read()
    finally:
        csv.file.close()

    inserted = service.import_csv(content, csv.filename)
    return CsvImportResponse(inserted=inserted)
