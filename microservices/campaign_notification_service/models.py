"""
Campaign Notification Service Data Models

Typed events decoded from the broker, the user record fetched for enrichment,
and the notification handed to the mail provider.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ====================
# Enums
# ====================

class EventKind(str, Enum):
    """Campaign lifecycle event kinds, one broker queue each"""
    CREATED = "created"
    DELETED = "deleted"


SUBJECTS = {
    EventKind.CREATED: "🎉 Campaign Created",
    EventKind.DELETED: "🗑️ Campaign Deleted",
}


# ====================
# Inbound events
# ====================

class CampaignRecord(BaseModel):
    """A campaign as published by campaign_service on creation"""
    id: str = Field(..., min_length=1, description="Campaign ID")
    user_id: int = Field(..., ge=0, description="Owning user ID")
    title: str = ""
    description: str = ""
    target_amount: int = 0
    min_donation: int = 0
    collected_amount: int = 0
    deadline: Optional[datetime] = Field(None, description="Deadline (UTC)")
    status: int = Field(0, description="Status code")
    category: int = Field(0, description="Category code")


class CampaignItem(BaseModel):
    """One unit of notification work: a single campaign and its owner"""
    model_config = ConfigDict(frozen=True)

    kind: EventKind
    campaign_id: str = Field(..., min_length=1)
    user_id: int = Field(..., ge=0)
    campaign: Optional[CampaignRecord] = None


class CampaignCreatedEvent(BaseModel):
    """campaign.created: one or more newly created campaigns"""
    kind: Literal[EventKind.CREATED] = EventKind.CREATED
    campaigns: List[CampaignRecord] = Field(..., min_length=1)

    def items(self) -> Iterator[CampaignItem]:
        for campaign in self.campaigns:
            yield CampaignItem(
                kind=self.kind,
                campaign_id=campaign.id,
                user_id=campaign.user_id,
                campaign=campaign,
            )


class CampaignDeletedEvent(BaseModel):
    """campaign.deleted: a single removed campaign"""
    kind: Literal[EventKind.DELETED] = EventKind.DELETED
    campaign_id: str = Field(..., min_length=1)
    user_id: int = Field(..., ge=0)

    def items(self) -> Iterator[CampaignItem]:
        yield CampaignItem(kind=self.kind, campaign_id=self.campaign_id, user_id=self.user_id)


CampaignEvent = Annotated[
    Union[CampaignCreatedEvent, CampaignDeletedEvent],
    Field(discriminator="kind"),
]


# ====================
# Enrichment / delivery
# ====================

class UserRecord(BaseModel):
    """User profile fields needed to address a notification"""
    model_config = ConfigDict(frozen=True)

    id: int
    name: str = ""
    email: str


class RenderedNotification(BaseModel):
    """A ready-to-send email; built once, sent once"""
    model_config = ConfigDict(frozen=True)

    kind: EventKind
    recipient: str
    subject: str
    html: str


class DeliveryReceipt(BaseModel):
    """Provider acknowledgement of an accepted message (logged only)"""
    message_id: str
    message: Optional[str] = None


class MessageOutcome(BaseModel):
    """What the consumer loop did with one broker message"""
    acknowledged: bool = False
    items: int = 0
    sent: int = 0
    skipped: int = 0
