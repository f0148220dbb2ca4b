"""Registry of ahead-of-time generated message classes."""

import logging
from types import ModuleType

from google.protobuf import descriptor_pool, message_factory
from google.protobuf.descriptor import Descriptor, EnumDescriptor, FileDescriptor
from google.protobuf.descriptor_pool import DescriptorPool
from google.protobuf.internal.enum_type_wrapper import EnumTypeWrapper

from .adapter import from_message_class
from .errors import NotFoundError
from .types import EnumValueMap, ProtoRegistry, ResolvedMessageType, enum_value_map

logger = logging.getLogger(__name__)

_g_default: "StaticRegistry | None" = None


def _values_of(enum: EnumDescriptor) -> EnumValueMap:
    return enum_value_map({value.name: value.number for value in enum.values})


class StaticRegistry(ProtoRegistry):
    """Index of generated message classes keyed by fully-qualified name.

    The index is filled from generated ``_pb2`` modules, message classes and
    enums passed at construction or to ``register()``. When a ``pool`` is
    given, names missing from the index are also looked up in that descriptor
    pool, which is how the process-wide generated-code registry is reached.

    Example:
        from google.protobuf import timestamp_pb2

        registry = StaticRegistry(timestamp_pb2)
        resolved = registry.resolve_message_type("google.protobuf.Timestamp")
    """

    def __init__(self, *sources: object, pool: DescriptorPool | None = None) -> None:
        self._messages: dict[str, object] = {}
        self._enums: dict[str, EnumValueMap] = {}
        self._pool = pool
        for source in sources:
            self.register(source)

    def register(self, source: object) -> None:
        """Add a generated module, file descriptor, message class or enum to the index."""
        if isinstance(source, FileDescriptor):
            self._register_file(source)
        elif isinstance(source, EnumDescriptor):
            self.register_enum(source)
        elif isinstance(source, EnumTypeWrapper):
            self.register_enum(source.DESCRIPTOR)
        elif isinstance(source, type) and isinstance(getattr(source, "DESCRIPTOR", None), Descriptor):
            self.register_message(source.DESCRIPTOR.full_name, source)
            self._register_children(source.DESCRIPTOR)
        elif isinstance(source, ModuleType) and isinstance(getattr(source, "DESCRIPTOR", None), FileDescriptor):
            self._register_file(source.DESCRIPTOR)
        else:
            raise TypeError(f"Cannot register {source!r}: expected a generated module, message class or enum")

    def register_message(self, name: str, native: object) -> None:
        """Register an object under a message name.

        The object is not checked here; it must have the shape of a generated
        message class by the time the name is resolved.
        """
        self._messages[name] = native

    def register_enum(self, enum: EnumDescriptor) -> None:
        self._enums[enum.full_name] = _values_of(enum)

    def _register_file(self, file: FileDescriptor) -> None:
        for msg in file.message_types_by_name.values():
            self._register_descriptor(msg)
        for enum in file.enum_types_by_name.values():
            self.register_enum(enum)
        logger.debug("registered %s: %d messages, %d enums", file.name, len(self._messages), len(self._enums))

    def _register_descriptor(self, msg: Descriptor) -> None:
        self.register_message(msg.full_name, message_factory.GetMessageClass(msg))
        self._register_children(msg)

    def _register_children(self, msg: Descriptor) -> None:
        for nested in msg.nested_types:
            self._register_descriptor(nested)
        for enum in msg.enum_types:
            self.register_enum(enum)

    def _lookup(self, name: str) -> object | None:
        native = self._messages.get(name)
        if native is not None or self._pool is None:
            return native
        try:
            msg = self._pool.FindMessageTypeByName(name)
        except KeyError:
            return None
        return message_factory.GetMessageClass(msg)

    def has_message_type(self, name: str) -> bool:
        return self._lookup(name) is not None

    def resolve_message_type(self, name: str) -> ResolvedMessageType:
        logger.debug("looking up message type %s", name)
        native = self._lookup(name)
        if native is None:
            raise NotFoundError(name)
        return from_message_class(native, name)

    def resolve_enum_value_map(self, name: str) -> EnumValueMap | None:
        logger.debug("looking up enum %s", name)
        values = self._enums.get(name)
        if values is not None or self._pool is None:
            return values
        try:
            return _values_of(self._pool.FindEnumTypeByName(name))
        except KeyError:
            return None


def default_registry() -> StaticRegistry:
    """Return the registry backed by the default descriptor pool.

    Every generated module imported into the process registers itself with
    that pool, so the result resolves any generated type without listing
    modules up front.
    """
    global _g_default

    if _g_default is None:
        _g_default = StaticRegistry(pool=descriptor_pool.Default())
    return _g_default
