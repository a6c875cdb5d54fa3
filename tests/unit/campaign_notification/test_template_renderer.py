"""
Unit Tests for the Template Renderer

Label mapping, deadline formatting, template families and startup validation.
"""

from datetime import datetime, timezone

import pytest

from microservices.campaign_notification_service.models import EventKind, RenderedNotification
from microservices.campaign_notification_service.protocols import RenderError
from microservices.campaign_notification_service.template_renderer import (
    CATEGORY_LABELS,
    STATUS_LABELS,
    UNKNOWN_LABEL,
    TemplateRenderer,
    category_label,
    status_label,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer(template_dir) -> TemplateRenderer:
    return TemplateRenderer(template_dir=template_dir)


class TestLabels:
    """Status / category code mapping is total"""

    @pytest.mark.parametrize("code,label", sorted(STATUS_LABELS.items()))
    def test_every_status_code_has_a_label(self, code, label):
        assert status_label(code) == label

    @pytest.mark.parametrize("code,label", sorted(CATEGORY_LABELS.items()))
    def test_every_category_code_has_a_label(self, code, label):
        assert category_label(code) == label

    @pytest.mark.parametrize("code", [-1, 99, 12345])
    def test_unknown_codes_fall_back(self, code):
        assert status_label(code) == UNKNOWN_LABEL
        assert category_label(code) == UNKNOWN_LABEL

    def test_unset_category_is_unknown(self):
        assert category_label(0) == UNKNOWN_LABEL

    def test_known_examples(self):
        assert status_label(1) == "Active"
        assert category_label(2) == "Education"


class TestRenderCreated:
    """campaign_create.html"""

    def test_round_trip_scenario(self, renderer, factory):
        item = factory.make_created_item(id="C1", title="Clean Water", target_amount=1000,
                                         status=1, category=2, user_id=42)
        user = factory.make_user(user_id=42, email="donor@example.com")

        notification = renderer.render(item, user)

        assert isinstance(notification, RenderedNotification)
        assert notification.subject == "🎉 Campaign Created"
        assert notification.recipient == "donor@example.com"
        assert notification.kind == EventKind.CREATED
        assert "Clean Water" in notification.html
        assert "Active" in notification.html
        assert "Education" in notification.html
        assert "1000" in notification.html

    def test_unknown_codes_render_fallback_label(self, renderer, factory):
        item = factory.make_created_item(status=42, category=42)

        notification = renderer.render(item, factory.make_user())

        assert UNKNOWN_LABEL in notification.html

    def test_deadline_formatted_in_configured_timezone(self, template_dir, factory):
        renderer = TemplateRenderer(template_dir=template_dir, timezone="Asia/Jakarta")
        item = factory.make_created_item(deadline=datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc))

        notification = renderer.render(item, factory.make_user())

        assert "2025-01-01 07:00 WIB" in notification.html

    def test_deadline_default_utc(self, renderer):
        assert renderer.format_deadline(datetime(2025, 12, 31, 23, 59, tzinfo=timezone.utc)) == "2025-12-31 23:59 UTC"

    def test_missing_deadline_renders_placeholder(self, renderer):
        assert renderer.format_deadline(None) == "-"

    def test_html_is_escaped(self, renderer, factory):
        item = factory.make_created_item(title="<script>alert(1)</script>")

        notification = renderer.render(item, factory.make_user())

        assert "<script>" not in notification.html
        assert "&lt;script&gt;" in notification.html

    def test_rendering_is_deterministic(self, renderer, factory):
        item = factory.make_created_item()
        user = factory.make_user()

        first = renderer.render(item, user)
        second = renderer.render(item, user)

        assert first.subject == second.subject
        assert first.html.encode() == second.html.encode()

    def test_password_never_reaches_output(self, renderer, factory):
        user = factory.make_user()

        notification = renderer.render(factory.make_created_item(), user)

        assert "password" not in notification.html.lower()
        assert "$2a$" not in notification.html


class TestRenderDeleted:
    """campaign_delete.html"""

    def test_deletion_scenario(self, renderer, factory):
        notification = renderer.render(factory.make_deleted_item("C9", 7), factory.make_user(user_id=7))

        assert notification.subject == "🗑️ Campaign Deleted"
        assert notification.kind == EventKind.DELETED
        assert "C9" in notification.html

    def test_deleted_body_carries_no_campaign_details(self, renderer, factory):
        notification = renderer.render(factory.make_deleted_item("C9", 7), factory.make_user(user_id=7))

        assert "Clean Water" not in notification.html
        assert "Target Amount" not in notification.html


class TestKindMismatch:

    def test_created_item_without_record_raises(self, renderer, factory):
        from microservices.campaign_notification_service.models import CampaignItem

        item = CampaignItem(kind=EventKind.CREATED, campaign_id="C1", user_id=1)

        with pytest.raises(RenderError):
            renderer.render(item, factory.make_user())


class TestValidate:
    """Startup validation of template files"""

    def test_packaged_templates_validate(self, renderer):
        renderer.validate()

    def test_missing_template_fails(self, tmp_path):
        (tmp_path / "campaign_create.html").write_text("<p>{{ id }}</p>")
        renderer = TemplateRenderer(template_dir=str(tmp_path))

        with pytest.raises(RenderError, match="campaign_delete.html"):
            renderer.validate()

    def test_malformed_template_fails(self, tmp_path):
        (tmp_path / "campaign_create.html").write_text("<p>{% if id %}</p>")
        (tmp_path / "campaign_delete.html").write_text("<p>{{ id }}</p>")
        renderer = TemplateRenderer(template_dir=str(tmp_path))

        with pytest.raises(RenderError, match="campaign_create.html"):
            renderer.validate()

    def test_unknown_timezone_fails(self, template_dir):
        with pytest.raises(RenderError, match="timezone"):
            TemplateRenderer(template_dir=template_dir, timezone="Mars/Olympus_Mons")

    def test_template_removed_after_startup_raises_render_error(self, tmp_path, factory):
        (tmp_path / "campaign_create.html").write_text("<p>{{ id }}</p>")
        (tmp_path / "campaign_delete.html").write_text("<p>{{ id }}</p>")
        renderer = TemplateRenderer(template_dir=str(tmp_path))
        renderer.validate()

        (tmp_path / "campaign_delete.html").unlink()

        with pytest.raises(RenderError):
            renderer.render(factory.make_deleted_item(), factory.make_user())
