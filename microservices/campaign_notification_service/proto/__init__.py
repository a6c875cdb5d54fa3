"""
Protobuf payloads exchanged with campaign_service (via the broker) and
user_service (via gRPC)
"""
from .messages import (
    GET_USER_BY_ID_METHOD,
    Campaign,
    CreateCampaignResponse,
    Notification,
    UserIdRequest,
    UserResponse,
)

__all__ = [
    "GET_USER_BY_ID_METHOD",
    "Campaign",
    "CreateCampaignResponse",
    "Notification",
    "UserIdRequest",
    "UserResponse",
]
