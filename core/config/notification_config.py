#!/usr/bin/env python3
"""Campaign notification service main configuration

Combines all sub-configs and validates the settings the service cannot start
without.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path

from .infra_config import InfraConfig
from .logging_config import LoggingConfig
from .mail_config import MailConfig
from .service_config import ServiceConfig

DEFAULT_TEMPLATE_DIR = str(
    Path(__file__).resolve().parents[2]
    / "microservices" / "campaign_notification_service" / "templates"
)


class ConfigurationError(Exception):
    """Raised when required startup configuration is missing or invalid"""
    pass


@dataclass
class TemplateConfig:
    """Template location and rendering locale"""
    template_dir: str = DEFAULT_TEMPLATE_DIR
    created_template: str = "campaign_create.html"
    deleted_template: str = "campaign_delete.html"
    timezone: str = "UTC"

    @classmethod
    def from_env(cls) -> 'TemplateConfig':
        return cls(
            template_dir=os.getenv("TEMPLATE_DIR", DEFAULT_TEMPLATE_DIR),
            created_template=os.getenv("CREATED_TEMPLATE", "campaign_create.html"),
            deleted_template=os.getenv("DELETED_TEMPLATE", "campaign_delete.html"),
            timezone=os.getenv("NOTIFICATION_TIMEZONE", "UTC"),
        )


@dataclass
class NotificationConfig:
    """Top-level configuration for the campaign notification service"""
    environment: str = "development"
    debug: bool = False

    infrastructure: InfraConfig = field(default_factory=InfraConfig)
    services: ServiceConfig = field(default_factory=ServiceConfig)
    mail: MailConfig = field(default_factory=MailConfig)
    templates: TemplateConfig = field(default_factory=TemplateConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'NotificationConfig':
        """Load the complete configuration from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            infrastructure=InfraConfig.from_env(),
            services=ServiceConfig.from_env(),
            mail=MailConfig.from_env(),
            templates=TemplateConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    def validate(self) -> None:
        """Raise ConfigurationError for settings the service cannot run without"""
        if not self.mail.is_configured:
            raise ConfigurationError("MAILGUN_DOMAIN or MAILGUN_API_KEY not set")
        if not self.infrastructure.rabbitmq_url:
            raise ConfigurationError("RABBITMQ_URL not set")
        if not self.services.user_service_addr:
            raise ConfigurationError("USER_SERVICE_ADDR not set")
