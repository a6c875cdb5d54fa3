"""
Event Consumer Loop

One loop per queue. Messages are handled strictly one after another:
decode, then for every campaign in the message enrich, render and dispatch,
then acknowledge once.

Failure policy at the message boundary:
- DecodeError: logged, message left unacknowledged for the broker to redeliver
  or dead-letter
- EnrichmentError / RenderError / DeliveryError, or any other error raised
  while processing one campaign: logged, that campaign is skipped, siblings
  continue, message is still acknowledged
- An error outside per-campaign processing (e.g. the ack itself): logged,
  message left unacknowledged, loop keeps running
"""

import asyncio
import logging
from typing import AsyncIterator, Optional

from .event_decoder import decode_event
from .models import CampaignItem, EventKind, MessageOutcome
from .protocols import (
    DecodeError,
    DeliveryError,
    EmailDispatcherProtocol,
    EnrichmentError,
    IncomingMessageProtocol,
    MessageQueueProtocol,
    RenderError,
    TemplateRendererProtocol,
    UserEnricherProtocol,
)

logger = logging.getLogger(__name__)

CONSUMER_TAGS = {
    EventKind.CREATED: "notification-consumers",
    EventKind.DELETED: "notification-consumers-delete",
}


class EventConsumerLoop:
    """Consumes one campaign event queue until the shutdown event is set"""

    def __init__(
        self,
        kind: EventKind,
        queue: MessageQueueProtocol,
        enricher: UserEnricherProtocol,
        renderer: TemplateRendererProtocol,
        dispatcher: EmailDispatcherProtocol,
        shutdown: asyncio.Event,
        consumer_tag: Optional[str] = None,
    ):
        self.kind = kind
        self.queue = queue
        self.enricher = enricher
        self.renderer = renderer
        self.dispatcher = dispatcher
        self.shutdown = shutdown
        self.consumer_tag = consumer_tag or CONSUMER_TAGS[kind]

    @property
    def queue_name(self) -> str:
        return getattr(self.queue, "name", self.kind.value)

    async def run(self):
        """Receive and handle messages until shutdown is requested"""
        logger.info(f"[{self.queue_name}] Waiting for messages (consumer: {self.consumer_tag})")
        async with self.queue.iterator(consumer_tag=self.consumer_tag) as messages:
            while not self.shutdown.is_set():
                message = await self._next_message(messages)
                if message is None:
                    break
                try:
                    await self.handle_message(message)
                except Exception as e:
                    logger.exception(
                        f"[{self.queue_name}] Unexpected error handling message, left unacknowledged: {e}",
                        extra={"queue": self.queue_name, "failure": "unexpected"},
                    )
        logger.info(f"[{self.queue_name}] Consumer stopped")

    async def _next_message(self, messages: AsyncIterator) -> Optional[IncomingMessageProtocol]:
        """Wait for the next message; None once shutdown is set or the stream ends"""
        receive = asyncio.ensure_future(messages.__anext__())
        stop = asyncio.ensure_future(self.shutdown.wait())
        done, _ = await asyncio.wait({receive, stop}, return_when=asyncio.FIRST_COMPLETED)

        if receive in done:
            stop.cancel()
            try:
                return receive.result()
            except StopAsyncIteration:
                return None

        receive.cancel()
        try:
            await receive
        except (asyncio.CancelledError, StopAsyncIteration):
            pass
        return None

    async def handle_message(self, message: IncomingMessageProtocol) -> MessageOutcome:
        """
        Run one broker message through the pipeline.

        Args:
            message: Broker message with ``body`` and ``ack()``

        Returns:
            MessageOutcome describing what happened
        """
        try:
            event = decode_event(message.body, self.kind)
        except DecodeError as e:
            logger.warning(
                f"[{self.queue_name}] Failed to decode message: {e}",
                extra={"queue": self.queue_name, "failure": "decode", "delivery_tag": message.delivery_tag},
            )
            return MessageOutcome(acknowledged=False)

        outcome = MessageOutcome()
        for item in event.items():
            outcome.items += 1
            if await self.process_item(item):
                outcome.sent += 1
            else:
                outcome.skipped += 1

        await message.ack()
        outcome.acknowledged = True

        if outcome.skipped:
            logger.warning(
                f"[{self.queue_name}] Message acknowledged with {outcome.skipped}/{outcome.items} campaign(s) skipped",
                extra={"queue": self.queue_name, "sent": outcome.sent, "skipped": outcome.skipped},
            )
        return outcome

    async def process_item(self, item: CampaignItem) -> bool:
        """Enrich, render and dispatch one campaign. Returns True if an email was sent."""
        fields = {"queue": self.queue_name, "campaign_id": item.campaign_id, "user_id": item.user_id}

        try:
            return await self._deliver(item, fields)
        except Exception as e:
            logger.exception(
                f"[{self.queue_name}] Skipping campaign {item.campaign_id} after unexpected error: {e}",
                extra={**fields, "failure": "unexpected"},
            )
            return False

    async def _deliver(self, item: CampaignItem, fields: dict) -> bool:
        try:
            user = await self.enricher.get_user(item.user_id)
        except EnrichmentError as e:
            logger.error(
                f"[{self.queue_name}] Skipping campaign {item.campaign_id}: {e}",
                extra={**fields, "failure": "enrichment", "reason": e.reason.value},
            )
            return False

        try:
            notification = await asyncio.to_thread(self.renderer.render, item, user)
        except RenderError as e:
            logger.error(
                f"[{self.queue_name}] Skipping campaign {item.campaign_id}: {e}",
                extra={**fields, "failure": "render"},
            )
            return False

        try:
            receipt = await self.dispatcher.send(notification)
        except DeliveryError as e:
            logger.error(
                f"[{self.queue_name}] ❌ Failed to send email for campaign {item.campaign_id}: {e}",
                extra={**fields, "failure": "delivery", "reason": e.reason.value},
            )
            return False

        logger.info(
            f"[{self.queue_name}] ✅ Email sent successfully: ID: {receipt.message_id}",
            extra={**fields, "message_id": receipt.message_id},
        )
        return True
