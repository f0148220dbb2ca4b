"""pbregistry - Resolve protobuf message types by name across registries."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pbregistry")
except PackageNotFoundError:
    __version__ = "(local)"
