"""
Campaign Notification Service Package

Consumes campaign lifecycle events and emails campaign owners
"""

from .models import *
from .consumer import EventConsumerLoop
from .event_decoder import decode_event
from .template_renderer import TemplateRenderer

__version__ = "1.0.0"
__all__ = [
    "EventConsumerLoop",
    "TemplateRenderer",
    "decode_event",
]
