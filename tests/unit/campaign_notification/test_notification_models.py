"""
Unit Tests for Campaign Notification Models
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from microservices.campaign_notification_service.models import (
    SUBJECTS,
    CampaignCreatedEvent,
    CampaignDeletedEvent,
    CampaignEvent,
    EventKind,
    MessageOutcome,
    RenderedNotification,
    UserRecord,
)

pytestmark = pytest.mark.unit


class TestEventKind:

    def test_values(self):
        assert EventKind.CREATED.value == "created"
        assert EventKind.DELETED.value == "deleted"

    def test_every_kind_has_a_subject(self):
        assert SUBJECTS[EventKind.CREATED] == "🎉 Campaign Created"
        assert SUBJECTS[EventKind.DELETED] == "🗑️ Campaign Deleted"
        assert set(SUBJECTS) == set(EventKind)


class TestCampaignEventUnion:
    """The union is discriminated on kind"""

    def test_created_variant_selected_by_kind(self, factory):
        adapter = TypeAdapter(CampaignEvent)

        event = adapter.validate_python({
            "kind": "created",
            "campaigns": [factory.make_campaign_record().model_dump()],
        })

        assert isinstance(event, CampaignCreatedEvent)

    def test_deleted_variant_selected_by_kind(self):
        adapter = TypeAdapter(CampaignEvent)

        event = adapter.validate_python({"kind": "deleted", "campaign_id": "C9", "user_id": 7})

        assert isinstance(event, CampaignDeletedEvent)

    def test_created_requires_at_least_one_campaign(self):
        with pytest.raises(ValidationError):
            CampaignCreatedEvent(campaigns=[])

    def test_deleted_requires_campaign_id(self):
        with pytest.raises(ValidationError):
            CampaignDeletedEvent(campaign_id="", user_id=1)


class TestImmutability:

    def test_rendered_notification_is_frozen(self, factory):
        notification = factory.make_notification()

        with pytest.raises(ValidationError):
            notification.recipient = "someone@example.com"

    def test_user_record_has_no_password_field(self):
        assert "password" not in UserRecord.model_fields

    def test_user_record_is_frozen(self, factory):
        user = factory.make_user()

        with pytest.raises(ValidationError):
            user.email = "other@example.com"


def test_message_outcome_defaults():
    outcome = MessageOutcome()

    assert outcome.acknowledged is False
    assert outcome.items == outcome.sent == outcome.skipped == 0
