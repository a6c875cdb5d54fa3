#!/usr/bin/env python3
"""Mail provider configuration (Mailgun)"""
import os
from dataclasses import dataclass
from typing import Optional

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class MailConfig:
    """Mailgun credentials and sender identity"""
    domain: Optional[str] = None
    api_key: Optional[str] = None
    api_base: str = "https://api.mailgun.net/v3"
    timeout: float = 10.0

    sender_name: str = "CrowdfundingApp"
    sender_local_part: str = "crowdfunding"

    @property
    def sender(self) -> str:
        """From header, e.g. ``CrowdfundingApp <crowdfunding@mg.example.com>``"""
        return f"{self.sender_name} <{self.sender_local_part}@{self.domain}>"

    @property
    def is_configured(self) -> bool:
        return bool(self.domain) and bool(self.api_key)

    @classmethod
    def from_env(cls) -> 'MailConfig':
        """Load mail config from environment variables"""
        return cls(
            domain=os.getenv("MAILGUN_DOMAIN") or None,
            api_key=os.getenv("MAILGUN_API_KEY") or None,
            api_base=os.getenv("MAILGUN_API_BASE", "https://api.mailgun.net/v3").rstrip("/"),
            timeout=_float(os.getenv("MAILGUN_TIMEOUT", "10"), 10.0),
            sender_name=os.getenv("MAIL_SENDER_NAME", "CrowdfundingApp"),
            sender_local_part=os.getenv("MAIL_SENDER_LOCAL_PART", "crowdfunding"),
        )
