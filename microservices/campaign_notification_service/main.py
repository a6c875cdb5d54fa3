"""
Campaign Notification Microservice

Responsibilities:
- Consume campaign.created / campaign.deleted events from RabbitMQ
- Resolve campaign owners through user_service (gRPC)
- Render HTML notifications and deliver them through Mailgun

Usage:
    python -m microservices.campaign_notification_service.main --addr localhost:50051
    campaign-notifier --env-file .env
"""

import argparse
import asyncio
import logging
import signal
import sys
from typing import Callable, Dict, List, Optional

from core.config import ConfigurationError, NotificationConfig, get_settings
from core.logger import setup_service_logger
from .broker import BrokerContext
from .consumer import EventConsumerLoop
from .factory import create_consumer_loop, create_renderer
from .models import EventKind
from .protocols import BrokerUnavailableError, RenderError
from .template_renderer import TemplateRenderer

SERVICE_NAME = "campaign_notification_service"

logger = logging.getLogger(__name__)

STARTUP_ERRORS = (ConfigurationError, RenderError, BrokerUnavailableError)


class NotificationApp:
    """Owns startup checks, the broker context, both consumer loops and shutdown"""

    def __init__(
        self,
        config: NotificationConfig,
        broker: Optional[BrokerContext] = None,
        renderer_factory: Callable[[NotificationConfig], TemplateRenderer] = create_renderer,
        loop_factory: Callable[..., EventConsumerLoop] = create_consumer_loop,
    ):
        """
        Args:
            config: Service configuration
            broker: Broker context (for DI/testing)
            renderer_factory: Builds one template renderer per loop (for DI/testing)
            loop_factory: Builds one consumer loop per event kind (for DI/testing)
        """
        self.config = config
        self.broker = broker or BrokerContext(config.infrastructure)
        self.renderer_factory = renderer_factory
        self.renderers: Dict[EventKind, TemplateRenderer] = {}
        self.loop_factory = loop_factory
        self.shutdown = asyncio.Event()
        self.loops: List[EventConsumerLoop] = []

    async def start(self):
        """
        Run every startup check, in order. Any failure here is fatal.

        Raises:
            ConfigurationError: Mail credentials or endpoints missing
            RenderError: A template is missing or does not compile
            BrokerUnavailableError: RabbitMQ unreachable
        """
        self.config.validate()

        # one renderer per loop; loops render on worker threads
        self.renderers = {kind: self.renderer_factory(self.config) for kind in EventKind}
        for renderer in self.renderers.values():
            renderer.validate()

        await self.broker.connect()

        self.loops = [
            self.loop_factory(kind, self.broker, self.renderers[kind], self.config, self.shutdown)
            for kind in EventKind
        ]
        logger.info(f"Using Mailgun domain: '{self.config.mail.domain}'")
        logger.info(f"Using user_service at: '{self.config.services.user_service_addr}'")

    def request_shutdown(self):
        if not self.shutdown.is_set():
            logger.info("Shutdown requested, finishing in-flight messages")
            self.shutdown.set()

    def _install_signal_handlers(self):
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.request_shutdown)
            except (NotImplementedError, RuntimeError):
                logger.debug(f"Signal handler for {sig.name} not supported on this platform")

    async def _supervise(self, consumer: EventConsumerLoop):
        try:
            await consumer.run()
        except Exception:
            logger.exception(f"Consumer for '{consumer.queue_name}' stopped unexpectedly")
            self.request_shutdown()
            raise

    async def run(self):
        """Start, consume until shutdown, then release every resource"""
        await self.start()
        self._install_signal_handlers()
        logger.info(" [*] Waiting for campaign events. To exit press CTRL+C")

        try:
            results = await asyncio.gather(
                *(self._supervise(consumer) for consumer in self.loops),
                return_exceptions=True,
            )
        finally:
            await self.stop()

        failures = [r for r in results if isinstance(r, Exception)]
        if failures:
            raise failures[0]

    async def stop(self):
        """Close per-loop clients, then the broker"""
        for consumer in self.loops:
            await consumer.enricher.close()
            await consumer.dispatcher.close()
        await self.broker.close()
        logger.info("Campaign notification service stopped")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Campaign notification consumer")
    parser.add_argument(
        "--addr",
        default=None,
        help="user_service gRPC address with port (overrides USER_SERVICE_ADDR)",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="env file to load (defaults to the ENV-selected deployment file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings(args.env_file)
    if args.addr:
        settings.services.user_service_addr = args.addr

    setup_service_logger(SERVICE_NAME, settings.logging)

    app = NotificationApp(settings)
    try:
        asyncio.run(app.run())
    except STARTUP_ERRORS as e:
        logger.critical(f"Startup failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
