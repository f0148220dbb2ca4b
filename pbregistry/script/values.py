"""Values handed to scripts when a package attribute resolves."""

from collections.abc import Iterator
from dataclasses import dataclass

from google.protobuf.descriptor_pb2 import DescriptorProto, FileDescriptorProto
from google.protobuf.message import Message

from pbregistry.registry.types import EnumValueMap, ResolvedMessageType


@dataclass(frozen=True, slots=True)
class EnumType:
    """A protobuf enum, exposing its members as attributes.

    Example:
        kind = pkg.PhoneType
        kind.MOBILE        # 0
        kind["HOME"]       # 1
        "WORK" in kind     # True
    """

    name: str
    values: EnumValueMap

    def __getattr__(self, member: str) -> int:
        if member.startswith("__") or member in ("name", "values"):
            raise AttributeError(member)
        try:
            return self.values[member]
        except KeyError:
            raise AttributeError(f"Enum {self.name} has no value with name '{member}'") from None

    def __getitem__(self, member: str) -> int:
        return self.values[member]

    def __contains__(self, member: object) -> bool:
        return member in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __dir__(self) -> list[str]:
        return sorted(self.values)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'<proto.EnumType "{self.name}">'


@dataclass(frozen=True, slots=True)
class MessageType:
    """A resolved protobuf message type.

    Building messages with field values is left to the caller; this value only
    carries the descriptors and hands out empty instances.
    """

    name: str
    resolved: ResolvedMessageType

    @property
    def full_name(self) -> str:
        return self.resolved.full_name

    def descriptors(self) -> tuple[FileDescriptorProto, DescriptorProto]:
        return self.resolved.descriptors()

    def new(self) -> Message:
        """Return a new zero-valued message of this type."""
        return self.resolved.new()

    def __repr__(self) -> str:
        return f'<proto.MessageType "{self.name}">'
