"""
User Service Client

gRPC client for user_service. Resolves the owner of a campaign to the
profile fields used to address a notification.
"""

import asyncio
import logging
from typing import Optional

import grpc

from ..models import UserRecord
from ..protocols import EnrichmentError, EnrichmentFailure
from ..proto import GET_USER_BY_ID_METHOD, UserIdRequest, UserResponse

logger = logging.getLogger(__name__)

_STATUS_FAILURES = {
    grpc.StatusCode.NOT_FOUND: EnrichmentFailure.NOT_FOUND,
    grpc.StatusCode.DEADLINE_EXCEEDED: EnrichmentFailure.TIMEOUT,
}


class UserServiceClient:
    """Client for user_service GetUserByID over gRPC"""

    def __init__(
        self,
        address: str,
        use_tls: bool = True,
        timeout: float = 60.0,
        channel: Optional[grpc.aio.Channel] = None,
    ):
        """
        Initialize user service client

        Args:
            address: host:port of user_service (fixed, not discovered)
            use_tls: Use TLS transport credentials with the system roots
            timeout: Per-call deadline in seconds
            channel: Pre-built channel (for DI/testing)
        """
        self.address = address
        self.use_tls = use_tls
        self.timeout = timeout

        # Lazy initialization; the channel lives until close()
        self.channel = channel
        self._get_user_by_id = None
        if channel is not None:
            self._bind(channel)

    def _bind(self, channel: grpc.aio.Channel):
        self._get_user_by_id = channel.unary_unary(
            GET_USER_BY_ID_METHOD,
            request_serializer=UserIdRequest.SerializeToString,
            response_deserializer=UserResponse.FromString,
        )

    def _ensure_connected(self):
        if self.channel is not None:
            return

        logger.debug(f"[user_service] Connecting to {self.address} (tls={self.use_tls})")
        if self.use_tls:
            credentials = grpc.ssl_channel_credentials()
            self.channel = grpc.aio.secure_channel(self.address, credentials)
        else:
            self.channel = grpc.aio.insecure_channel(self.address)
        self._bind(self.channel)

    async def get_user(self, user_id: int) -> UserRecord:
        """
        Get the user profile for a campaign owner

        Args:
            user_id: User ID (>= 0)

        Returns:
            UserRecord with id, name and email

        Raises:
            EnrichmentError: user_service unreachable, user missing, or deadline hit
        """
        self._ensure_connected()
        try:
            response = await self._get_user_by_id(UserIdRequest(id=user_id), timeout=self.timeout)
        except grpc.aio.AioRpcError as e:
            reason = _STATUS_FAILURES.get(e.code(), EnrichmentFailure.UNREACHABLE)
            raise EnrichmentError(reason, user_id, f"{e.code().name}: {e.details()}") from e
        except asyncio.TimeoutError as e:
            raise EnrichmentError(EnrichmentFailure.TIMEOUT, user_id, "call timed out") from e

        if not response.email:
            raise EnrichmentError(EnrichmentFailure.NOT_FOUND, user_id, "user has no email address")

        # password is never copied into the record
        return UserRecord(id=response.id, name=response.name, email=response.email)

    async def close(self):
        """Close gRPC channel"""
        if self.channel is not None:
            await self.channel.close()
            self.channel = None
            self._get_user_by_id = None
            logger.info("UserServiceClient closed")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
