"""
Realtime WebSocket endpoint

Server pushes broadcast events as ``{"event": ..., "data": ...}`` frames.
Clients may send ``refresh:orders`` / ``refresh:items`` to receive a
snapshot addressed only to themselves.
"""
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from kds.database import get_session_factory
from kds.publishers import get_broadcaster
from kds.publishers.broadcaster import Broadcaster, Subscriber
from kds.repositories.item_repository import ItemRepository
from kds.repositories.order_repository import OrderRepository
from kds.schemas import realtime
from kds.schemas.realtime import RealtimeMessage
from kds.services.item_service import serialize_item
from kds.services.order_service import serialize_order

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


def orders_snapshot(session_factory: sessionmaker) -> List[Dict[str, Any]]:
    db = session_factory()
    try:
        return [serialize_order(o) for o in OrderRepository(db).list_active()]
    finally:
        db.close()


def items_snapshot(session_factory: sessionmaker) -> List[Dict[str, Any]]:
    db = session_factory()
    try:
        return [serialize_item(i) for i in ItemRepository(db).get_all()]
    finally:
        db.close()


SNAPSHOTS: Dict[str, tuple] = {
    realtime.REFRESH_ORDERS: (realtime.ORDERS_REFRESH, orders_snapshot),
    realtime.REFRESH_ITEMS: (realtime.ITEMS_REFRESH, items_snapshot),
}


def parse_event_name(raw: str) -> Optional[str]:
    """
    Event name of a client frame

    Accepts a JSON frame ``{"event": ...}`` or the bare event name as text.
    """
    try:
        return RealtimeMessage.model_validate(json.loads(raw)).event
    except (ValueError, PydanticValidationError):
        pass
    name = raw.strip()
    return name if name in SNAPSHOTS else None


async def _pump(websocket: WebSocket, broadcaster: Broadcaster, subscriber: Subscriber) -> None:
    """Drain the subscriber queue to the socket; a failed send drops the subscriber"""
    while True:
        message = await subscriber.queue.get()
        try:
            await websocket.send_json(message)
        except Exception as e:
            logger.debug(f"Send to subscriber {subscriber.id} failed: {e}")
            broadcaster.unsubscribe(subscriber)
            return


@router.websocket("/ws")
async def realtime_feed(
    websocket: WebSocket,
    broadcaster: Broadcaster = Depends(get_broadcaster),
    session_factory: sessionmaker = Depends(get_session_factory)
):
    await websocket.accept()
    subscriber = broadcaster.subscribe()
    sender = asyncio.create_task(_pump(websocket, broadcaster, subscriber))

    try:
        while True:
            raw = await websocket.receive_text()
            event = parse_event_name(raw)
            snapshot = SNAPSHOTS.get(event) if event else None
            if snapshot is None:
                logger.debug(f"Ignoring frame from {subscriber.id}: {raw[:80]!r}")
                continue

            reply_event, build = snapshot
            try:
                data = await run_in_threadpool(build, session_factory)
            except SQLAlchemyError:
                logger.exception(f"Snapshot {event} failed for subscriber {subscriber.id}")
                continue
            broadcaster.send_to(subscriber, reply_event, data)
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.unsubscribe(subscriber)
        sender.cancel()
