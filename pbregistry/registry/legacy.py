"""Registry for a second, independently generated set of message classes.

Legacy code generators can register types whose names collide with the ones
known to the primary registry while having incompatible layouts. Both are kept
apart with a name prefix:

    pb = proto.package("google.protobuf")
    gogo_pb = proto.package("gogo:google.protobuf")
    # pb.Timestamp and gogo_pb.Timestamp are distinct types.

A prefixed name is resolved against the legacy classes only. An unprefixed
name is resolved against the primary registry when it knows the name, and
against the legacy classes otherwise.
"""

import logging

from google.protobuf.descriptor_pool import DescriptorPool

from .static import StaticRegistry, default_registry
from .types import EnumValueMap, ProtoRegistry, ResolvedMessageType

logger = logging.getLogger(__name__)

LEGACY_PREFIX = "gogo:"


def split_legacy_prefix(name: str) -> tuple[bool, str]:
    """Return whether the legacy prefix was present, and the name without it."""
    if name.startswith(LEGACY_PREFIX):
        return True, name[len(LEGACY_PREFIX) :]
    return False, name


class LegacyRegistry(StaticRegistry):
    """Legacy message classes, falling back from a primary registry.

    Args:
        sources: Legacy generated modules, message classes or enums.
        primary: Registry consulted first for unprefixed names. Defaults to
            ``default_registry()``.
        pool: Descriptor pool holding legacy types missing from the index.
    """

    def __init__(
        self,
        *sources: object,
        primary: ProtoRegistry | None = None,
        pool: DescriptorPool | None = None,
    ) -> None:
        super().__init__(*sources, pool=pool)
        self._primary = primary if primary is not None else default_registry()

    def has_message_type(self, name: str) -> bool:
        forced, bare = split_legacy_prefix(name)
        if not forced and self._primary.has_message_type(name):
            return True
        return super().has_message_type(bare)

    def resolve_message_type(self, name: str) -> ResolvedMessageType:
        forced, bare = split_legacy_prefix(name)
        if not forced and self._primary.has_message_type(name):
            logger.debug("%s is known to the primary registry", name)
            return self._primary.resolve_message_type(name)
        return super().resolve_message_type(bare)

    def resolve_enum_value_map(self, name: str) -> EnumValueMap | None:
        forced, bare = split_legacy_prefix(name)
        if not forced:
            values = self._primary.resolve_enum_value_map(name)
            if values is not None:
                return values
        return super().resolve_enum_value_map(bare)
