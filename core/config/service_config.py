#!/usr/bin/env python3
"""Service configuration for peer services

The notifier calls a single peer: the user service, over gRPC. Its address is
fixed configuration, never discovered.
"""
import os
from dataclasses import dataclass

DEFAULT_USER_SERVICE_ADDR = "user-service-273575294549.asia-southeast2.run.app:443"

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class ServiceConfig:
    """Peer service endpoints"""

    # ===========================================
    # User Service (gRPC)
    # ===========================================
    user_service_addr: str = DEFAULT_USER_SERVICE_ADDR
    user_service_tls: bool = True
    user_service_timeout: float = 60.0

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        """Load service configuration from environment variables"""
        return cls(
            user_service_addr=os.getenv("USER_SERVICE_ADDR", DEFAULT_USER_SERVICE_ADDR),
            user_service_tls=_bool(os.getenv("USER_SERVICE_TLS", "true")),
            user_service_timeout=_float(os.getenv("USER_SERVICE_TIMEOUT", "60"), 60.0),
        )
