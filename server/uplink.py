"""Platform uplink: consumes tasks published for this server.

Other platform services publish JSON messages ``{"task": ..., "sender": ...}``
on a direct exchange. This listener binds an exclusive, anonymous queue under
the server routing key and reacts to ``Deploy`` tasks by running the deployment
script. Every delivery is acknowledged; anything other than a deploy task is
ignored.
"""

import json
import logging
from typing import Optional

import aio_pika
from aio_pika.abc import AbstractChannel, AbstractIncomingMessage, AbstractRobustConnection
from aio_pika.exceptions import AMQPError
from pydantic import ValidationError

from .deploy import DeployRunner
from .models import UplinkMessage

logger = logging.getLogger(__name__)

DEPLOY_TASK = "Deploy"


def parse_message(body: bytes) -> Optional[UplinkMessage]:
    """Decode a message body, None when it is not a valid uplink message."""
    try:
        return UplinkMessage.model_validate(json.loads(body.decode("utf-8")))
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Discarding malformed uplink message: {e}")
        return None


class UplinkListener:
    """Single consumer of the server's uplink queue."""

    def __init__(
        self,
        url: str,
        runner: DeployRunner,
        exchange_name: str = "platform",
        routing_key: str = "server"
    ):
        self.url = url
        self.runner = runner
        self.exchange_name = exchange_name
        self.routing_key = routing_key
        self.connection: Optional[AbstractRobustConnection] = None
        self.channel: Optional[AbstractChannel] = None

    async def start(self) -> None:
        """Connect, declare the topology and start consuming."""
        try:
            self.connection = await aio_pika.connect_robust(self.url)
        except (AMQPError, OSError) as e:
            raise RuntimeError("Uplink connection missing.") from e

        self.channel = await self.connection.channel()
        await self.channel.set_qos(prefetch_count=1)
        exchange = await self.channel.declare_exchange(
            self.exchange_name, aio_pika.ExchangeType.DIRECT, durable=False
        )
        queue = await self.channel.declare_queue("", exclusive=True)
        await queue.bind(exchange, routing_key=self.routing_key)
        await queue.consume(self.on_message, no_ack=False)
        logger.info(f"Uplink listening on exchange '{self.exchange_name}' with key '{self.routing_key}'")

    async def close(self) -> None:
        if self.connection and not self.connection.is_closed:
            await self.connection.close()
            logger.info("Uplink connection closed")
        self.connection = None
        self.channel = None

    async def on_message(self, message: AbstractIncomingMessage) -> None:
        """Acknowledge the delivery, then dispatch its task."""
        await message.ack()
        uplink_message = parse_message(message.body)
        if uplink_message is not None:
            await self.dispatch(uplink_message)

    async def dispatch(self, message: UplinkMessage) -> bool:
        """Run the task carried by ``message``. Returns True when a deployment ran."""
        if message.task != DEPLOY_TASK:
            logger.debug(f"Ignoring uplink task '{message.task}' from {message.sender}")
            return False
        if not self.runner.supported:
            logger.info(f"Deploy task from {message.sender} ignored on platform '{self.runner.platform}'")
            return False

        logger.info(
            f"Received new deploy task from {message.sender}. Running Documentation deployment script."
        )
        await self.runner.run()
        return True
