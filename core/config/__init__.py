#!/usr/bin/env python3
"""Modular configuration system for the campaign notification service

Configuration hierarchy:
- infra_config: Message broker (RabbitMQ) endpoint and topology
- service_config: Peer services (user service over gRPC)
- mail_config: Mail provider (Mailgun) credentials and sender identity
- logging_config: Logging configuration
- notification_config: Aggregate config, templates, startup validation
"""
import os
from typing import Optional

from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .infra_config import InfraConfig
from .mail_config import MailConfig
from .service_config import ServiceConfig
from .notification_config import (
    ConfigurationError,
    NotificationConfig,
    TemplateConfig,
)

env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}


def load_environment(env_file: Optional[str] = None) -> None:
    """Load variables from an env file; existing process variables win"""
    if env_file is None:
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        env_file = env_files.get(env, "deployment/environments/dev.env")
    load_dotenv(env_file, override=False)


def get_settings(env_file: Optional[str] = None) -> NotificationConfig:
    """Load environment and build a fresh settings instance"""
    load_environment(env_file)
    return NotificationConfig.from_env()


__all__ = [
    # Main config
    'NotificationConfig',
    'ConfigurationError',
    'get_settings',
    'load_environment',
    # Sub-configs
    'LoggingConfig',
    'InfraConfig',
    'MailConfig',
    'ServiceConfig',
    'TemplateConfig',
]
