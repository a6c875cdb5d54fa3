"""
Component Test Fixtures for Campaign Notification Service

Provides fixtures for component testing with mocked broker, user service
and mail provider. Templates are the real packaged ones.
"""

import asyncio
import os
import sys
from typing import Dict

import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.campaign_notification_service.models import EventKind
from microservices.campaign_notification_service.template_renderer import TemplateRenderer
from tests.component.campaign_notification.notification_mocks import (
    MockEmailDispatcher,
    MockUserEnricher,
)


@pytest.fixture
def enricher() -> MockUserEnricher:
    return MockUserEnricher()


@pytest.fixture
def dispatcher() -> MockEmailDispatcher:
    return MockEmailDispatcher()


@pytest.fixture
def renderer(template_dir) -> TemplateRenderer:
    renderer = TemplateRenderer(template_dir=template_dir)
    renderer.validate()
    return renderer


@pytest.fixture
def shutdown() -> asyncio.Event:
    return asyncio.Event()


@pytest.fixture
def queue_names() -> Dict[EventKind, str]:
    return {
        EventKind.CREATED: "campaign_created_notification",
        EventKind.DELETED: "campaign_deleted_notification",
    }
