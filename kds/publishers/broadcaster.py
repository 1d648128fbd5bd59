"""
In-memory WebSocket fan-out

Each connected subscriber owns an ``asyncio.Queue`` bound to the event loop
of its connection. ``publish`` only schedules a ``put_nowait`` on that loop,
so it is safe to call from FastAPI's threadpool as well as from the loop
itself, and it never waits for delivery.
"""
import asyncio
import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List

from kds.publishers.base import EventPublisher

logger = logging.getLogger(__name__)


@dataclass
class Subscriber:
    """A connected realtime client"""
    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])


class Broadcaster(EventPublisher):
    """Best-effort fan-out of events to all connected subscribers"""

    def __init__(self):
        self._subscribers: Dict[str, Subscriber] = {}
        self._lock = threading.Lock()

    @property
    def provider_name(self) -> str:
        return "memory"

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self) -> Subscriber:
        """Register a subscriber on the running event loop"""
        subscriber = Subscriber(loop=asyncio.get_running_loop(), queue=asyncio.Queue())
        with self._lock:
            self._subscribers[subscriber.id] = subscriber
        logger.info(f"Subscriber {subscriber.id} connected ({self.subscriber_count} total)")
        return subscriber

    def unsubscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            removed = self._subscribers.pop(subscriber.id, None)
        if removed:
            logger.info(f"Subscriber {subscriber.id} disconnected ({self.subscriber_count} total)")

    def publish(self, event: str, payload: Any) -> None:
        """Broadcast to every subscriber connected right now"""
        with self._lock:
            subscribers: List[Subscriber] = list(self._subscribers.values())

        message = {"event": event, "data": payload}
        for subscriber in subscribers:
            self._deliver(subscriber, message)
        logger.debug(f"Published {event} to {len(subscribers)} subscriber(s)")

    def send_to(self, subscriber: Subscriber, event: str, payload: Any) -> None:
        """Address a message to a single subscriber (snapshot replies)"""
        self._deliver(subscriber, {"event": event, "data": payload})

    def _deliver(self, subscriber: Subscriber, message: Dict[str, Any]) -> None:
        try:
            subscriber.loop.call_soon_threadsafe(subscriber.queue.put_nowait, message)
        except RuntimeError:
            # Loop already closed: the connection is gone
            self.unsubscribe(subscriber)
