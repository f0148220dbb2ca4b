"""Values shared by every registry backend.

A backend answers two questions: which message type is registered under a
fully-qualified name, and which enum value map is. Both answers are returned in
backend-neutral form so callers never care where the type came from.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from google.protobuf.descriptor_pb2 import DescriptorProto, FileDescriptorProto
from google.protobuf.message import Message

from .errors import InternalError

# Symbolic enum member name -> signed 32-bit value. Read-only.
EnumValueMap = Mapping[str, int]


def enum_value_map(values: Mapping[str, int]) -> EnumValueMap:
    """Freeze a name -> number mapping."""
    return MappingProxyType(dict(values))


@dataclass(frozen=True, slots=True)
class ResolvedMessageType:
    """A message type normalized to a descriptor pair and an empty instance.

    Each resolution allocates a new instance; the registry keeps no reference
    to it.

    ``path`` holds the simple names of the enclosing messages, outermost
    first, ending with the message itself.
    """

    file_descriptor: FileDescriptorProto
    message_descriptor: DescriptorProto
    empty: Message
    path: tuple[str, ...]

    def descriptors(self) -> tuple[FileDescriptorProto, DescriptorProto]:
        return self.file_descriptor, self.message_descriptor

    def enclosing_names(self) -> list[str]:
        """Names from the outermost message down to this one.

        Raises:
            InternalError: If walking the file descriptor along the path does
                not reach the message descriptor.
        """
        messages = self.file_descriptor.message_type
        found = None
        for simple_name in self.path:
            found = next((m for m in messages if m.name == simple_name), None)
            if found is None:
                break
            messages = found.nested_type
        if found is None or found != self.message_descriptor:
            raise InternalError(
                f"InternalError: message {self.message_descriptor.name!r} is not declared "
                f"in file {self.file_descriptor.name!r}",
                self.message_descriptor.name,
            )
        return list(self.path)

    @property
    def full_name(self) -> str:
        """Dotted name rebuilt from the file package and the enclosing messages."""
        chunks = []
        if self.file_descriptor.package:
            chunks.append(self.file_descriptor.package)
        chunks.extend(self.enclosing_names())
        return ".".join(chunks)

    def new(self) -> Message:
        """Allocate another zero-valued instance of the same type."""
        return type(self.empty)()


class ProtoRegistry:
    """Base class for message type registries.

    Subclasses implement both lookups. A registry is built once and only read
    afterwards, so it may be shared between threads.
    """

    def resolve_message_type(self, name: str) -> ResolvedMessageType:
        """Resolve a fully-qualified message name.

        Raises:
            NotFoundError: The name is not registered.
            WrongKindError: The name is registered but is not a message.
            InternalError: The registration cannot be used as a message.
        """
        raise NotImplementedError("resolve_message_type() must be implemented by a backend")

    def resolve_enum_value_map(self, name: str) -> EnumValueMap | None:
        """Return the value map of a fully-qualified enum name, or None."""
        raise NotImplementedError("resolve_enum_value_map() must be implemented by a backend")

    def has_message_type(self, name: str) -> bool:
        """Check whether a message name is registered, without resolving it."""
        raise NotImplementedError("has_message_type() must be implemented by a backend")

