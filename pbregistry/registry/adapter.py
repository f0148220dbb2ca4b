"""Normalize native message types into ResolvedMessageType values.

Registries hold whatever was registered with them. Before anything is handed
to a caller, the registration is checked once for the shape resolution needs:
a class deriving from ``google.protobuf.message.Message`` whose ``DESCRIPTOR``
is a message descriptor and which constructs with no arguments.
"""

from dataclasses import dataclass

from google.protobuf import message_factory
from google.protobuf.descriptor import Descriptor
from google.protobuf.descriptor_pb2 import DescriptorProto, FileDescriptorProto
from google.protobuf.message import Message

from .errors import InternalError
from .types import ResolvedMessageType


@dataclass(frozen=True, slots=True)
class MessageShape:
    """A registration that passed the shape check."""

    message_class: type[Message]
    descriptor: Descriptor


@dataclass(frozen=True, slots=True)
class WrongShape:
    """A registration that cannot be used as a message type."""

    native: object
    reason: str


def check_shape(native: object) -> MessageShape | WrongShape:
    """Check whether a registered object is a usable generated message class."""
    if not isinstance(native, type):
        return WrongShape(native, "not a class")
    if not issubclass(native, Message):
        return WrongShape(native, "does not derive from google.protobuf.message.Message")
    descriptor = getattr(native, "DESCRIPTOR", None)
    if not isinstance(descriptor, Descriptor):
        return WrongShape(native, "has no message DESCRIPTOR")
    if message_factory.GetMessageClass(descriptor) is not native:
        return WrongShape(native, f"is not the generated class for {descriptor.full_name}")
    return MessageShape(native, descriptor)


def enclosing_path(descriptor: Descriptor) -> tuple[str, ...]:
    """Simple names from the outermost containing message down to ``descriptor``."""
    chain = []
    scope: Descriptor | None = descriptor
    while scope is not None:
        chain.append(scope.name)
        scope = scope.containing_type
    return tuple(reversed(chain))


def descriptor_pair(descriptor: Descriptor) -> tuple[FileDescriptorProto, DescriptorProto]:
    """Copy a message descriptor and its owning file out of a descriptor pool.

    The message descriptor is taken from inside the copied file, so walking
    the file's declarations along ``enclosing_path`` always reaches it.
    """
    file_proto = FileDescriptorProto()
    descriptor.file.CopyToProto(file_proto)

    messages = file_proto.message_type
    found = None
    for simple_name in enclosing_path(descriptor):
        found = next((m for m in messages if m.name == simple_name), None)
        if found is None:
            raise InternalError(
                f"InternalError: message {descriptor.full_name!r} is not declared "
                f"in file {file_proto.name!r}",
                descriptor.full_name,
            )
        messages = found.nested_type

    msg_proto = DescriptorProto()
    msg_proto.CopyFrom(found)
    return file_proto, msg_proto


def from_message_class(native: object, name: str | None = None) -> ResolvedMessageType:
    """Resolve a registered object into a descriptor pair and an empty instance.

    Args:
        native: The registered object, normally a generated message class.
        name: The name it was looked up by, for error reporting.

    Raises:
        InternalError: If the object does not have the shape of a generated
            message, or cannot be constructed with no arguments.
    """
    shape = check_shape(native)
    if isinstance(shape, WrongShape):
        raise InternalError.bad_shape(name, shape.native, shape.reason)

    try:
        empty = shape.message_class()
    except Exception as err:
        raise InternalError.bad_shape(name, native, f"cannot be constructed: {err}") from err

    file_proto, msg_proto = descriptor_pair(shape.descriptor)
    return ResolvedMessageType(
        file_descriptor=file_proto,
        message_descriptor=msg_proto,
        empty=empty,
        path=enclosing_path(shape.descriptor),
    )
