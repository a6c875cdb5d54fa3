"""
Campaign Notification Service Factory

Factory functions for creating service components with real dependencies.
This is the ONLY place that constructs I/O-bound clients.

Usage:
    from .factory import create_renderer, create_consumer_loop
    renderer = create_renderer(settings)
    loop = create_consumer_loop(EventKind.CREATED, broker, renderer, settings, shutdown)
"""
import asyncio

from core.config import NotificationConfig
from .broker import BrokerContext
from .consumer import EventConsumerLoop
from .models import EventKind
from .template_renderer import TemplateRenderer


def create_renderer(config: NotificationConfig) -> TemplateRenderer:
    """Create the TemplateRenderer from template settings (not yet validated)"""
    templates = config.templates
    return TemplateRenderer(
        template_dir=templates.template_dir,
        created_template=templates.created_template,
        deleted_template=templates.deleted_template,
        timezone=templates.timezone,
    )


def create_consumer_loop(
    kind: EventKind,
    broker: BrokerContext,
    renderer: TemplateRenderer,
    config: NotificationConfig,
    shutdown: asyncio.Event,
) -> EventConsumerLoop:
    """
    Create a consumer loop with its own user service and mail clients.

    The renderer passed in must belong to this loop alone; together with the
    per-loop clients the two loops share no mutable state besides the broker
    channel.
    """
    from .clients import MailgunClient, UserServiceClient

    enricher = UserServiceClient(
        address=config.services.user_service_addr,
        use_tls=config.services.user_service_tls,
        timeout=config.services.user_service_timeout,
    )
    dispatcher = MailgunClient(
        domain=config.mail.domain,
        api_key=config.mail.api_key,
        sender=config.mail.sender,
        api_base=config.mail.api_base,
        timeout=config.mail.timeout,
    )

    return EventConsumerLoop(
        kind=kind,
        queue=broker.get_queue(kind),
        enricher=enricher,
        renderer=renderer,
        dispatcher=dispatcher,
        shutdown=shutdown,
    )
