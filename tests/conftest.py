"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/  : Component tests (mocked broker, gRPC and HTTP dependencies)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from tests.contracts.campaign_notification.data_contract import (
    CampaignNotificationTestDataFactory,
)


# =============================================================================
# Test Data
# =============================================================================

@pytest.fixture
def factory() -> CampaignNotificationTestDataFactory:
    """Provide test data factory"""
    return CampaignNotificationTestDataFactory()


@pytest.fixture
def template_dir() -> str:
    """Packaged HTML templates"""
    return os.path.join(
        PROJECT_ROOT, "microservices", "campaign_notification_service", "templates"
    )


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "component: Component tests")
    config.addinivalue_line("markers", "unit: Unit tests")
