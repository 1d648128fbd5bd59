"""
Event Publisher Factory

Returns the in-memory broadcaster, optionally mirrored to RabbitMQ when
EVENT_BUS=rabbitmq.
"""
import logging
from functools import lru_cache

from kds.config import settings
from kds.publishers.base import EventPublisher, CompositePublisher
from kds.publishers.broadcaster import Broadcaster, Subscriber
from kds.publishers.rabbitmq_publisher import RabbitMQPublisher

logger = logging.getLogger(__name__)


@lru_cache()
def get_broadcaster() -> Broadcaster:
    """Process-wide WebSocket broadcaster"""
    return Broadcaster()


@lru_cache()
def get_event_publisher() -> EventPublisher:
    """Get the configured event publisher."""
    broadcaster = get_broadcaster()

    if settings.EVENT_BUS == "rabbitmq":
        logger.info("Event publisher: memory broadcaster mirrored to RabbitMQ")
        return CompositePublisher([broadcaster, RabbitMQPublisher()])

    return broadcaster


def reset_event_publisher() -> None:
    """Clear the cached publisher instances."""
    get_event_publisher.cache_clear()
    get_broadcaster.cache_clear()


__all__ = [
    "get_broadcaster",
    "get_event_publisher",
    "reset_event_publisher",
    "EventPublisher",
    "CompositePublisher",
    "Broadcaster",
    "Subscriber",
    "RabbitMQPublisher",
]
