"""
Broker Context

Owns the process-wide RabbitMQ connection and channel. Opened once at startup
by the service orchestrator and handed to every consumer loop; closed at
shutdown.
"""

import logging
from typing import Dict, Optional

import aio_pika
from aio_pika.abc import AbstractChannel, AbstractQueue, AbstractRobustConnection
from aio_pika.exceptions import AMQPError

from core.config.infra_config import InfraConfig
from .models import EventKind
from .protocols import BrokerUnavailableError

logger = logging.getLogger(__name__)


class BrokerContext:
    """RabbitMQ connection, channel and the two notification queues"""

    def __init__(self, config: InfraConfig):
        self.config = config
        self.connection: Optional[AbstractRobustConnection] = None
        self.channel: Optional[AbstractChannel] = None
        self.queues: Dict[EventKind, AbstractQueue] = {}

    @property
    def bindings(self) -> Dict[EventKind, tuple]:
        """Queue name and routing key per event kind"""
        return {
            EventKind.CREATED: (self.config.created_queue, self.config.created_routing_key),
            EventKind.DELETED: (self.config.deleted_queue, self.config.deleted_routing_key),
        }

    async def connect(self) -> "BrokerContext":
        """Open the connection and channel, then declare exchange, queues and bindings"""
        try:
            self.connection = await aio_pika.connect_robust(self.config.rabbitmq_url)
            self.channel = await self.connection.channel()
            await self._declare_topology()
        except (AMQPError, OSError) as e:
            await self.close()
            raise BrokerUnavailableError(f"Can't connect to AMQP: {e}") from e

        logger.info(
            f"Connected to RabbitMQ, exchange '{self.config.exchange_name}' "
            f"with queues {[name for name, _ in self.bindings.values()]}"
        )
        return self

    async def _declare_topology(self):
        exchange = await self.channel.declare_exchange(
            self.config.exchange_name,
            aio_pika.ExchangeType.DIRECT,
            durable=True,
        )
        for kind, (queue_name, routing_key) in self.bindings.items():
            queue = await self.channel.declare_queue(queue_name, durable=True)
            await queue.bind(exchange, routing_key=routing_key)
            self.queues[kind] = queue
            logger.debug(f"Queue '{queue_name}' bound to '{routing_key}'")

    def get_queue(self, kind: EventKind) -> AbstractQueue:
        if kind not in self.queues:
            raise BrokerUnavailableError(f"queue for {kind.value} events is not declared; call connect() first")
        return self.queues[kind]

    async def close(self):
        """Close channel and connection"""
        if self.channel is not None and not self.channel.is_closed:
            await self.channel.close()
        if self.connection is not None and not self.connection.is_closed:
            await self.connection.close()
        self.channel = None
        self.connection = None
        self.queues = {}
        logger.info("BrokerContext closed")

    async def __aenter__(self):
        return await self.connect()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
