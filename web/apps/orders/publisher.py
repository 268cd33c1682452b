"""RabbitMQ publisher for order domain events.

Events are published to a durable topic exchange (``settings.EVENTS_EXCHANGE``)
using the topic name (``notificationTopic``) as routing key, with a JSON body
such as ``{"orderNumber": "..."}``. Publisher confirms are not enabled: the
call returns as soon as the message is handed to the broker connection.
"""

import json
import logging
from typing import Optional

import pika
from django.conf import settings

from .domain import EventPublisherPort, OrderPlacedEvent

logger = logging.getLogger("orders")


class RabbitMQEventPublisher(EventPublisherPort):
    """Publish events to a RabbitMQ topic exchange.

    A connection is opened per publication and always closed afterwards.
    """

    def __init__(self, url: Optional[str] = None, exchange: Optional[str] = None):
        self.url = url or settings.RABBITMQ_URL
        self.exchange = exchange or settings.EVENTS_EXCHANGE

    def _connect(self) -> pika.BlockingConnection:
        # bounded: this runs on the request thread after the order has committed
        params = pika.URLParameters(self.url)
        timeout = settings.RABBITMQ_SOCKET_TIMEOUT
        params.socket_timeout = timeout
        params.stack_timeout = timeout
        params.blocked_connection_timeout = timeout
        params.connection_attempts = 1
        return pika.BlockingConnection(params)

    def publish(self, topic: str, event: OrderPlacedEvent) -> None:
        """Send ``event`` with routing key ``topic``.

        Raises:
            pika.exceptions.AMQPError: When the broker cannot be reached or
                the channel fails.
        """
        body = json.dumps(event.to_payload()).encode("utf-8")
        conn = self._connect()
        try:
            ch = conn.channel()
            ch.exchange_declare(exchange=self.exchange, exchange_type="topic", durable=True)
            ch.basic_publish(
                exchange=self.exchange,
                routing_key=topic,
                body=body,
                properties=pika.BasicProperties(content_type="application/json", delivery_mode=2),
            )
        finally:
            if conn.is_open:
                conn.close()
        logger.info("event published", extra={"topic": topic, "payload": event.to_payload()})
