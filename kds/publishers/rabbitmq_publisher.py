"""
RabbitMQ Event Publisher

Mirrors realtime events to a topic exchange so other processes can follow
the kitchen feed. Messages are transient: nothing is queued for subscribers
that are not bound at publish time.
"""
import json
import logging
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Dict

import pika
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from kds.config import settings
from kds.publishers.base import EventPublisher

logger = logging.getLogger(__name__)


class RabbitMQPublisher(EventPublisher):
    """Publisher for mirroring events to RabbitMQ"""

    def __init__(self):
        self.rabbitmq_url = settings.RABBITMQ_URL
        self.exchange = settings.RABBITMQ_EXCHANGE
        # One worker keeps events in publish order
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="rabbitmq-publisher")

    @property
    def provider_name(self) -> str:
        return "rabbitmq"

    def publish(self, event: str, payload: Any) -> Future:
        """
        Queue the event for publishing in the background

        Returns:
            Future resolving to True if published, False otherwise
        """
        envelope = {
            "event_type": event,
            "event_id": str(uuid.uuid4()),
            "event_version": "1.0",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": settings.SERVICE_NAME,
            "data": payload
        }
        return self._executor.submit(self._publish_safely, envelope)

    def _publish_safely(self, envelope: Dict) -> bool:
        try:
            self._send(envelope)
            logger.debug(f"Event mirrored: {envelope['event_type']} (ID: {envelope['event_id']})")
            return True
        except Exception as e:
            logger.warning(f"Failed to mirror {envelope['event_type']} to RabbitMQ: {e}")
            return False

    @retry(
        stop=stop_after_attempt(settings.MAX_RETRIES),
        wait=wait_exponential(multiplier=settings.RETRY_DELAY, min=1, max=10),
        retry=retry_if_exception_type(pika.exceptions.AMQPConnectionError),
        reraise=True
    )
    def _send(self, envelope: Dict) -> None:
        connection = pika.BlockingConnection(
            pika.URLParameters(self.rabbitmq_url)
        )
        try:
            channel = connection.channel()

            channel.exchange_declare(
                exchange=self.exchange,
                exchange_type='topic',
                durable=False
            )

            channel.basic_publish(
                exchange=self.exchange,
                routing_key=envelope["event_type"],
                body=json.dumps(envelope),
                properties=pika.BasicProperties(
                    delivery_mode=1,  # Transient
                    content_type='application/json',
                    correlation_id=envelope["event_id"]
                )
            )
        finally:
            connection.close()

    def close(self) -> None:
        """Wait for queued events, then stop the worker thread"""
        self._executor.shutdown(wait=True)
        logger.info("RabbitMQ publisher closed")
