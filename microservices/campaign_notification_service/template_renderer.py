"""
Template Renderer

Renders campaign notification emails from Jinja2 templates on disk.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from .models import SUBJECTS, CampaignItem, EventKind, RenderedNotification, UserRecord
from .protocols import RenderError

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"

STATUS_LABELS: Dict[int, str] = {
    0: "Draft",
    1: "Active",
    2: "Completed",
    3: "Cancelled",
    4: "Expired",
}

CATEGORY_LABELS: Dict[int, str] = {
    1: "Health",
    2: "Education",
    3: "Environment",
    4: "Disaster Relief",
    5: "Animals",
    6: "Community",
    7: "Technology",
    8: "Other",
}

DEADLINE_FORMAT = "%Y-%m-%d %H:%M %Z"


def status_label(code: int) -> str:
    return STATUS_LABELS.get(code, UNKNOWN_LABEL)


def category_label(code: int) -> str:
    return CATEGORY_LABELS.get(code, UNKNOWN_LABEL)


class TemplateRenderer:
    """Maps campaign items to rendered emails, one template family per event kind"""

    def __init__(
        self,
        template_dir: str,
        created_template: str = "campaign_create.html",
        deleted_template: str = "campaign_delete.html",
        timezone: str = "UTC",
    ):
        """
        Args:
            template_dir: Directory holding the HTML templates
            created_template: File name of the campaign.created template
            deleted_template: File name of the campaign.deleted template
            timezone: IANA zone used to display deadlines
        """
        self.template_dir = template_dir
        self.template_names = {
            EventKind.CREATED: created_template,
            EventKind.DELETED: deleted_template,
        }
        try:
            self.timezone = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise RenderError(f"unknown timezone '{timezone}'") from e

        # auto_reload re-reads a template whenever its file changes on disk
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            auto_reload=True,
            keep_trailing_newline=True,
        )

    def validate(self) -> None:
        """Load and compile every template; raise RenderError on the first failure"""
        for kind, name in self.template_names.items():
            try:
                self.env.get_template(name)
            except TemplateError as e:
                raise RenderError(
                    f"template '{name}' for {kind.value} events in {self.template_dir} is unusable: {e}"
                ) from e
        logger.info(f"Templates validated in {self.template_dir}")

    def format_deadline(self, deadline: Optional[datetime]) -> str:
        if deadline is None:
            return "-"
        return deadline.astimezone(self.timezone).strftime(DEADLINE_FORMAT)

    def _context(self, item: CampaignItem) -> Dict[str, Any]:
        if item.kind == EventKind.DELETED:
            return {"id": item.campaign_id}

        campaign = item.campaign
        if campaign is None:
            raise RenderError(f"created item {item.campaign_id} carries no campaign record")
        return {
            "id": campaign.id,
            "title": campaign.title,
            "description": campaign.description,
            "target_amount": campaign.target_amount,
            "min_donation": campaign.min_donation,
            "collected_amount": campaign.collected_amount,
            "deadline": self.format_deadline(campaign.deadline),
            "status": status_label(campaign.status),
            "category": category_label(campaign.category),
        }

    def render(self, item: CampaignItem, user: UserRecord) -> RenderedNotification:
        """
        Render the email for one campaign item.

        Args:
            item: Campaign item (kind decides the template family)
            user: Resolved owner of the campaign

        Returns:
            RenderedNotification addressed to the owner

        Raises:
            RenderError: Template missing/invalid or item does not match its kind
        """
        name = self.template_names[item.kind]
        context = self._context(item)
        try:
            html = self.env.get_template(name).render(**context)
        except TemplateError as e:
            raise RenderError(f"failed to render '{name}' for campaign {item.campaign_id}: {e}") from e

        return RenderedNotification(
            kind=item.kind,
            recipient=user.email,
            subject=SUBJECTS[item.kind],
            html=html,
        )
