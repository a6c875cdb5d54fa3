#!/usr/bin/env python3
"""
Core Module for the Campaign Notification Service

Shared infrastructure that is not specific to notification logic.

COMPONENTS:
    - config/: Dataclass configuration loaded from environment / env files
    - logger.py: Root logging setup (plain text or structured JSON lines)

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger("campaign_notification_service", settings.logging)
"""

from .config import ConfigurationError, NotificationConfig, get_settings
from .logger import setup_service_logger

__all__ = [
    "ConfigurationError",
    "NotificationConfig",
    "get_settings",
    "setup_service_logger",
]

__version__ = "1.0.0"
