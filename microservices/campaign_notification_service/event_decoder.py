"""
Event Decoder

Turns raw broker bodies into typed campaign events. Pure: no I/O, no logging.
The variant is fixed by the queue the bytes came from, so no payload type is
guessed at runtime.
"""

from datetime import timezone
from typing import Union

from google.protobuf.message import DecodeError as ProtobufDecodeError
from pydantic import ValidationError

from .models import CampaignCreatedEvent, CampaignDeletedEvent, CampaignRecord, EventKind
from .protocols import DecodeError
from .proto import CreateCampaignResponse, Notification


def _campaign_from_proto(message) -> CampaignRecord:
    deadline = None
    if message.HasField("deadline"):
        deadline = message.deadline.ToDatetime(tzinfo=timezone.utc)
    return CampaignRecord(
        id=message.id,
        user_id=message.user_id,
        title=message.title,
        description=message.description,
        target_amount=message.target_amount,
        min_donation=message.min_donation,
        collected_amount=message.collected_amount,
        deadline=deadline,
        status=message.status,
        category=message.category,
    )


def decode_created(body: bytes) -> CampaignCreatedEvent:
    """Decode a CreateCampaignResponse envelope"""
    try:
        response = CreateCampaignResponse.FromString(body)
    except ProtobufDecodeError as e:
        raise DecodeError(f"invalid CreateCampaignResponse payload: {e}") from e

    if not response.created_campaign:
        raise DecodeError("CreateCampaignResponse carries no created_campaign")

    try:
        return CampaignCreatedEvent(
            campaigns=[_campaign_from_proto(c) for c in response.created_campaign]
        )
    except ValidationError as e:
        raise DecodeError(f"invalid campaign record: {e}") from e


def decode_deleted(body: bytes) -> CampaignDeletedEvent:
    """Decode a Notification record"""
    try:
        notification = Notification.FromString(body)
    except ProtobufDecodeError as e:
        raise DecodeError(f"invalid Notification payload: {e}") from e

    try:
        return CampaignDeletedEvent(campaign_id=notification.id, user_id=notification.user_id)
    except ValidationError as e:
        raise DecodeError(f"invalid deletion notification: {e}") from e


_DECODERS = {
    EventKind.CREATED: decode_created,
    EventKind.DELETED: decode_deleted,
}


def decode_event(body: bytes, kind: EventKind) -> Union[CampaignCreatedEvent, CampaignDeletedEvent]:
    """
    Decode a broker message body for the given event kind.

    Args:
        body: Raw message bytes
        kind: Event kind of the queue the message was consumed from

    Returns:
        The decoded campaign event

    Raises:
        DecodeError: If the bytes are not a valid payload for ``kind``
    """
    return _DECODERS[kind](body)
