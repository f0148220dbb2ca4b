"""Serializable summaries of resolved types, used for CLI output."""

from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin
from google.protobuf.descriptor_pb2 import FieldDescriptorProto

from pbregistry.registry.types import EnumValueMap, ResolvedMessageType


@dataclass
class FieldSummary(DataClassJsonMixin):
    """One field of a message."""

    name: str
    number: int
    type: str
    label: str
    type_name: str | None


@dataclass
class MessageSummary(DataClassJsonMixin):
    """A resolved message type with its owning file."""

    name: str
    file: str
    package: str
    fields: list[FieldSummary]


@dataclass
class EnumSummary(DataClassJsonMixin):
    """A resolved enum value map."""

    name: str
    values: dict[str, int]


def _type_label(field: FieldDescriptorProto) -> tuple[str, str]:
    type_name = FieldDescriptorProto.Type.Name(field.type).removeprefix("TYPE_").lower()
    label = FieldDescriptorProto.Label.Name(field.label).removeprefix("LABEL_").lower()
    return type_name, label


def summarize_message(resolved: ResolvedMessageType) -> MessageSummary:
    file, msg = resolved.descriptors()
    fields = []
    for field in msg.field:
        type_name, label = _type_label(field)
        fields.append(
            FieldSummary(
                name=field.name,
                number=field.number,
                type=type_name,
                label=label,
                type_name=field.type_name.lstrip(".") or None,
            )
        )
    return MessageSummary(name=resolved.full_name, file=file.name, package=file.package, fields=fields)


def summarize_enum(name: str, values: EnumValueMap) -> EnumSummary:
    return EnumSummary(name=name, values=dict(values))
