"""Errors raised while resolving protobuf types."""


class RegistryError(RuntimeError):
    """Base class for registry failures."""

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class NotFoundError(RegistryError, LookupError):
    """Raised when a name is absent from the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Protobuf message type '{name}' not found", name)


class WrongKindError(RegistryError):
    """Raised when a name is registered but does not describe a message."""

    def __init__(self, name: str, kind: str) -> None:
        super().__init__(f"Protobuf type '{name}' is not a message (found {kind})", name)
        self.kind = kind


class InternalError(RegistryError):
    """Raised when a registered entry breaks the assumptions resolution relies on."""

    native: object = None

    @classmethod
    def bad_shape(cls, name: str | None, native: object, reason: str) -> "InternalError":
        """Build the error for a registration that is not a generated message."""
        err = cls(f"InternalError: {native!r} is not a generated protobuf message ({reason})", name)
        err.native = native
        return err


class DescriptorSetError(RegistryError):
    """Raised when a file descriptor set cannot be loaded."""
