"""
Campaign Notification Service Clients

Clients for communicating with other services
"""

from .mailgun_client import MailgunClient
from .user_client import UserServiceClient

__all__ = [
    "MailgunClient",
    "UserServiceClient",
]
