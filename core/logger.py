#!/usr/bin/env python3
"""
Service Logger Setup

Configures the root logger once per process. Modules keep using
``logging.getLogger(__name__)``; this only decides where records go and how
they look.
"""

import json
import logging
import sys
from typing import Optional

from core.config.logging_config import LoggingConfig

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, including fields passed via ``extra=``"""

    def __init__(self, service_name: str, environment: str):
        super().__init__()
        self.service_name = service_name
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service_name,
            "environment": self.environment,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def setup_service_logger(service_name: str, config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure root logging for a service and return the service logger.

    Args:
        service_name: Logger name used for the service's own messages
        config: Logging configuration (loaded from environment if omitted)

    Returns:
        Logger named after the service
    """
    config = config or LoggingConfig.from_env()

    if config.enable_structured:
        formatter = StructuredFormatter(config.service_name, config.environment)
    else:
        formatter = logging.Formatter(config.log_format)

    handlers = []
    if config.enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        handlers.append(console)
    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )

    # aio-pika and aiormq are chatty at DEBUG
    logging.getLogger("aiormq").setLevel(logging.WARNING)
    logging.getLogger("aio_pika").setLevel(logging.WARNING)

    return logging.getLogger(service_name)


__all__ = ["setup_service_logger", "StructuredFormatter"]
