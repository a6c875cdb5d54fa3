"""
Protobuf message classes for campaign and user service payloads

Mirrors campaign.proto and user.proto in this directory. The descriptors are
assembled with descriptor_pb2 and registered in the default pool, so the
resulting classes behave exactly like protoc output (FromString,
SerializeToString, HasField, ...) without a code generation step.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf import timestamp_pb2  # noqa: F401  registers google/protobuf/timestamp.proto

_Field = descriptor_pb2.FieldDescriptorProto


def _add_field(message, name: str, number: int, field_type: int,
               label: int = _Field.LABEL_OPTIONAL, type_name: str = ""):
    field = message.field.add(name=name, number=number, type=field_type, label=label)
    if type_name:
        field.type_name = type_name
    return field


def _campaign_file() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="campaign/v1/campaign.proto",
        package="campaign.v1",
        syntax="proto3",
    )
    proto.dependency.append("google/protobuf/timestamp.proto")

    campaign = proto.message_type.add(name="Campaign")
    _add_field(campaign, "id", 1, _Field.TYPE_STRING)
    _add_field(campaign, "user_id", 2, _Field.TYPE_INT32)
    _add_field(campaign, "title", 3, _Field.TYPE_STRING)
    _add_field(campaign, "description", 4, _Field.TYPE_STRING)
    _add_field(campaign, "target_amount", 5, _Field.TYPE_INT32)
    _add_field(campaign, "min_donation", 6, _Field.TYPE_INT32)
    _add_field(campaign, "collected_amount", 7, _Field.TYPE_INT32)
    _add_field(campaign, "deadline", 8, _Field.TYPE_MESSAGE, type_name=".google.protobuf.Timestamp")
    _add_field(campaign, "status", 9, _Field.TYPE_INT32)
    _add_field(campaign, "category", 10, _Field.TYPE_INT32)

    response = proto.message_type.add(name="CreateCampaignResponse")
    _add_field(response, "created_campaign", 1, _Field.TYPE_MESSAGE,
               label=_Field.LABEL_REPEATED, type_name=".campaign.v1.Campaign")

    notification = proto.message_type.add(name="Notification")
    _add_field(notification, "id", 1, _Field.TYPE_STRING)
    _add_field(notification, "user_id", 2, _Field.TYPE_INT32)
    return proto


def _user_file() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="user/user.proto",
        package="user",
        syntax="proto3",
    )

    request = proto.message_type.add(name="UserIdRequest")
    _add_field(request, "id", 1, _Field.TYPE_INT32)

    response = proto.message_type.add(name="UserResponse")
    _add_field(response, "id", 1, _Field.TYPE_INT32)
    _add_field(response, "name", 2, _Field.TYPE_STRING)
    _add_field(response, "email", 3, _Field.TYPE_STRING)
    _add_field(response, "password", 4, _Field.TYPE_STRING)

    service = proto.service.add(name="UserService")
    service.method.add(
        name="GetUserByID",
        input_type=".user.UserIdRequest",
        output_type=".user.UserResponse",
    )
    return proto


_pool = descriptor_pool.Default()
_pool.AddSerializedFile(_campaign_file().SerializeToString())
_pool.AddSerializedFile(_user_file().SerializeToString())


def _message_class(full_name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(full_name))


Campaign = _message_class("campaign.v1.Campaign")
CreateCampaignResponse = _message_class("campaign.v1.CreateCampaignResponse")
Notification = _message_class("campaign.v1.Notification")

UserIdRequest = _message_class("user.UserIdRequest")
UserResponse = _message_class("user.UserResponse")

GET_USER_BY_ID_METHOD = "/user.UserService/GetUserByID"
