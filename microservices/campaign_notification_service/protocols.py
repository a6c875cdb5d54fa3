"""
Campaign Notification Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from enum import Enum
from typing import AsyncContextManager, AsyncIterator, Optional, Protocol, runtime_checkable

from .models import CampaignItem, DeliveryReceipt, RenderedNotification, UserRecord


class NotificationServiceError(Exception):
    """Base exception for campaign notification errors"""
    pass


class DecodeError(NotificationServiceError):
    """Broker payload could not be decoded into a campaign event"""
    pass


class RenderError(NotificationServiceError):
    """Template missing, malformed, or given a payload of the wrong kind"""
    pass


class BrokerUnavailableError(NotificationServiceError):
    """Message broker could not be reached or topology could not be declared"""
    pass


class EnrichmentFailure(str, Enum):
    """Why a user lookup failed"""
    UNREACHABLE = "unreachable"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"


class DeliveryFailure(str, Enum):
    """Why the mail provider did not accept a message"""
    AUTH_FAILURE = "auth_failure"
    RATE_LIMITED = "rate_limited"
    NETWORK_ERROR = "network_error"
    INVALID_RECIPIENT = "invalid_recipient"


class EnrichmentError(NotificationServiceError):
    """User lookup failed"""

    def __init__(self, reason: EnrichmentFailure, user_id: Optional[int] = None, detail: str = ""):
        self.reason = reason
        self.user_id = user_id
        self.detail = detail
        super().__init__(f"user {user_id} lookup failed ({reason.value}): {detail}")


class DeliveryError(NotificationServiceError):
    """Mail provider rejected or did not answer"""

    def __init__(self, reason: DeliveryFailure, detail: str = "", status_code: Optional[int] = None):
        self.reason = reason
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"delivery failed ({reason.value}): {detail}")


@runtime_checkable
class UserEnricherProtocol(Protocol):
    """Resolves a user id to the profile used for addressing"""

    async def get_user(self, user_id: int) -> UserRecord:
        """Return the user or raise EnrichmentError"""
        ...

    async def close(self) -> None:
        ...


@runtime_checkable
class TemplateRendererProtocol(Protocol):
    """Turns a campaign item and its owner into an email"""

    def render(self, item: CampaignItem, user: UserRecord) -> RenderedNotification:
        """Return the rendered notification or raise RenderError"""
        ...


@runtime_checkable
class EmailDispatcherProtocol(Protocol):
    """Sends one email per call"""

    async def send(self, notification: RenderedNotification) -> DeliveryReceipt:
        """Return the provider receipt or raise DeliveryError"""
        ...

    async def close(self) -> None:
        ...


class IncomingMessageProtocol(Protocol):
    """The slice of a broker message the consumer loop relies on"""

    body: bytes
    delivery_tag: Optional[int]

    async def ack(self, multiple: bool = False) -> None:
        ...


class MessageQueueProtocol(Protocol):
    """A consumable queue (aio_pika.abc.AbstractQueue satisfies this)"""

    name: str

    def iterator(self, **kwargs) -> AsyncContextManager[AsyncIterator[IncomingMessageProtocol]]:
        ...
