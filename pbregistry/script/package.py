"""Lazily resolved protobuf packages for configuration scripts."""

import logging

from pbregistry.registry.errors import RegistryError
from pbregistry.registry.static import default_registry
from pbregistry.registry.types import ProtoRegistry

from .values import EnumType, MessageType

logger = logging.getLogger(__name__)


class ProtoPackage:
    """A named protobuf package bound to a registry.

    Creating a package resolves nothing. Each attribute access builds the
    fully-qualified name ``<package>.<attribute>`` and resolves it, first as an
    enum and then as a message type.

    Protobuf packages are aggregated from many ``.proto`` files, and registries
    cannot list their contents, so ``dir()`` of a package is empty.
    """

    __slots__ = ("_name", "_registry")

    def __init__(self, name: str, registry: ProtoRegistry | None = None) -> None:
        self._name = name
        self._registry = registry

    def __getattr__(self, attr: str) -> EnumType | MessageType:
        if attr in ProtoPackage.__slots__ or (attr.startswith("__") and attr.endswith("__")):
            raise AttributeError(attr)

        full_name = f"{self._name}.{attr}"
        registry = self._registry if self._registry is not None else default_registry()

        values = registry.resolve_enum_value_map(full_name)
        if values is not None:
            return EnumType(full_name, values)

        try:
            resolved = registry.resolve_message_type(full_name)
        except RegistryError as err:
            logger.debug("cannot resolve %s: %s", full_name, err)
            raise AttributeError(str(err)) from err
        return MessageType(full_name, resolved)

    def __dir__(self) -> list[str]:
        return []

    __hash__ = None  # type: ignore[assignment]

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f'<proto.Package "{self._name}">'


class ProtoModule:
    """The ``proto`` module exposed to scripts.

    Example:
        proto = ProtoModule(registry)
        pb = proto.package("google.protobuf")
        pb.Timestamp
    """

    def __init__(self, registry: ProtoRegistry | None = None) -> None:
        self._registry = registry

    def package(self, name: str) -> ProtoPackage:
        return ProtoPackage(name, self._registry)

    def __repr__(self) -> str:
        return "<module proto>"
