"""
Mailgun Client

HTTP client for the Mailgun messages API. One POST per notification,
no retries.
"""

import logging
from typing import Optional

import httpx

from ..models import DeliveryReceipt, RenderedNotification
from ..protocols import DeliveryError, DeliveryFailure

logger = logging.getLogger(__name__)


def _failure_for_status(status_code: int) -> DeliveryFailure:
    if status_code in (401, 403):
        return DeliveryFailure.AUTH_FAILURE
    if status_code == 429:
        return DeliveryFailure.RATE_LIMITED
    if status_code in (400, 422):
        return DeliveryFailure.INVALID_RECIPIENT
    return DeliveryFailure.NETWORK_ERROR


class MailgunClient:
    """Client for the Mailgun HTTP API"""

    def __init__(
        self,
        domain: str,
        api_key: str,
        sender: str,
        api_base: str = "https://api.mailgun.net/v3",
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize Mailgun client

        Args:
            domain: Sending domain registered with Mailgun
            api_key: Private API key
            sender: From header, e.g. ``CrowdfundingApp <crowdfunding@domain>``
            api_base: API root (EU accounts use https://api.eu.mailgun.net/v3)
            timeout: Per-request timeout in seconds
            http_client: Pre-built client (for DI/testing)
        """
        self.domain = domain
        self.sender = sender

        # HTTP client (support DI)
        if http_client is not None:
            self.client = http_client
        else:
            self.client = httpx.AsyncClient(
                base_url=api_base.rstrip("/"),
                auth=("api", api_key),
                timeout=timeout,
            )

        logger.info(f"MailgunClient initialized for domain: {domain}")

    async def send(self, notification: RenderedNotification) -> DeliveryReceipt:
        """
        Send a rendered notification

        Args:
            notification: Email to deliver

        Returns:
            DeliveryReceipt with the provider message ID

        Raises:
            DeliveryError: Provider rejected the message or could not be reached
        """
        form = {
            "from": self.sender,
            "to": notification.recipient,
            "subject": notification.subject,
            "html": notification.html,
        }

        try:
            response = await self.client.post(f"/{self.domain}/messages", data=form)
        except httpx.TimeoutException as e:
            raise DeliveryError(DeliveryFailure.NETWORK_ERROR, f"timed out: {e}") from e
        except httpx.HTTPError as e:
            raise DeliveryError(DeliveryFailure.NETWORK_ERROR, str(e)) from e

        if response.status_code != 200:
            raise DeliveryError(
                _failure_for_status(response.status_code),
                f"Mailgun API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise DeliveryError(DeliveryFailure.NETWORK_ERROR, f"unreadable Mailgun response: {response.text}") from e
        if not isinstance(result, dict):
            raise DeliveryError(DeliveryFailure.NETWORK_ERROR, f"unexpected Mailgun response: {response.text}")

        return DeliveryReceipt(message_id=result.get("id", ""), message=result.get("message"))

    async def close(self):
        """Close HTTP client connection"""
        await self.client.aclose()
        logger.info("MailgunClient closed")
