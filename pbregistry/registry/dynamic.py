"""Registry built from a serialized file descriptor set, with no generated code.

Messages are constructed from their descriptors at resolution time. Enum
lookups are not supported by this registry and always report the enum as
absent.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto
from os import PathLike

from google.protobuf import message_factory
from google.protobuf.descriptor_pb2 import (
    DescriptorProto,
    EnumDescriptorProto,
    FieldDescriptorProto,
    FileDescriptorProto,
    FileDescriptorSet,
)
from google.protobuf.descriptor_pool import DescriptorPool
from google.protobuf.message import DecodeError

from .errors import DescriptorSetError, NotFoundError, WrongKindError
from .types import EnumValueMap, ProtoRegistry, ResolvedMessageType

logger = logging.getLogger(__name__)


class DescriptorKind(StrEnum):
    """Kind of declaration a fully-qualified name refers to."""

    MESSAGE = auto()
    ENUM = auto()
    ENUM_VALUE = auto()
    FIELD = auto()
    EXTENSION = auto()
    SERVICE = auto()
    METHOD = auto()
    ONEOF = auto()


@dataclass(frozen=True, slots=True)
class _Entry:
    kind: DescriptorKind
    file: FileDescriptorProto
    message: DescriptorProto | None = None
    path: tuple[str, ...] = ()


def _index_enum(index: dict[str, _Entry], file: FileDescriptorProto, scope: str, enum: EnumDescriptorProto) -> None:
    index[scope + enum.name] = _Entry(DescriptorKind.ENUM, file)
    # Enum values are scoped as siblings of their enum.
    for value in enum.value:
        index[scope + value.name] = _Entry(DescriptorKind.ENUM_VALUE, file)


def _index_message(
    index: dict[str, _Entry],
    file: FileDescriptorProto,
    scope: str,
    msg: DescriptorProto,
    enclosing: tuple[str, ...] = (),
) -> None:
    name = scope + msg.name
    path = (*enclosing, msg.name)
    index[name] = _Entry(DescriptorKind.MESSAGE, file, msg, path)
    inner = f"{name}."
    for field in msg.field:
        index[inner + field.name] = _Entry(DescriptorKind.FIELD, file)
    for ext in msg.extension:
        index[inner + ext.name] = _Entry(DescriptorKind.EXTENSION, file)
    for oneof in msg.oneof_decl:
        index[inner + oneof.name] = _Entry(DescriptorKind.ONEOF, file)
    for nested in msg.nested_type:
        _index_message(index, file, inner, nested, path)
    for enum in msg.enum_type:
        _index_enum(index, file, inner, enum)


def _build_index(files: dict[str, FileDescriptorProto]) -> dict[str, _Entry]:
    index: dict[str, _Entry] = {}
    for file in files.values():
        scope = f"{file.package}." if file.package else ""
        for msg in file.message_type:
            _index_message(index, file, scope, msg)
        for enum in file.enum_type:
            _index_enum(index, file, scope, enum)
        for ext in file.extension:
            index[scope + ext.name] = _Entry(DescriptorKind.EXTENSION, file)
        for service in file.service:
            service_name = scope + service.name
            index[service_name] = _Entry(DescriptorKind.SERVICE, file)
            for method in service.method:
                index[f"{service_name}.{method.name}"] = _Entry(DescriptorKind.METHOD, file)
    return index


def _check_reference(
    index: dict[str, _Entry],
    file: FileDescriptorProto,
    type_name: str,
    allowed: tuple[DescriptorKind, ...],
) -> None:
    # Only fully-qualified references are checked here; relative ones are
    # left to the descriptor pool.
    if not type_name.startswith("."):
        return
    entry = index.get(type_name[1:])
    if entry is None or entry.kind not in allowed:
        raise DescriptorSetError(f"{file.name} references undefined type {type_name}", type_name)


def _check_fields(index: dict[str, _Entry], file: FileDescriptorProto, fields: list[FieldDescriptorProto]) -> None:
    for field in fields:
        if field.type_name:
            _check_reference(index, file, field.type_name, (DescriptorKind.MESSAGE, DescriptorKind.ENUM))
        if field.extendee:
            _check_reference(index, file, field.extendee, (DescriptorKind.MESSAGE,))


def _check_message(index: dict[str, _Entry], file: FileDescriptorProto, msg: DescriptorProto) -> None:
    _check_fields(index, file, list(msg.field))
    _check_fields(index, file, list(msg.extension))
    for nested in msg.nested_type:
        _check_message(index, file, nested)


def _check_references(index: dict[str, _Entry], files: dict[str, FileDescriptorProto]) -> None:
    for file in files.values():
        for dependency in file.dependency:
            if dependency not in files:
                raise DescriptorSetError(
                    f"{file.name} imports {dependency}, which is not in the descriptor set", dependency
                )
        for msg in file.message_type:
            _check_message(index, file, msg)
        _check_fields(index, file, list(file.extension))
        for service in file.service:
            for method in service.method:
                _check_reference(index, file, method.input_type, (DescriptorKind.MESSAGE,))
                _check_reference(index, file, method.output_type, (DescriptorKind.MESSAGE,))


def _dependency_order(files: dict[str, FileDescriptorProto]) -> list[FileDescriptorProto]:
    """Order files so every file comes after the files it imports."""
    ordered: list[FileDescriptorProto] = []
    done: set[str] = set()
    visiting: set[str] = set()

    def visit(name: str) -> None:
        if name in done:
            return
        if name in visiting:
            raise DescriptorSetError(f"Import cycle through {name}", name)
        visiting.add(name)
        for dependency in files[name].dependency:
            visit(dependency)
        visiting.discard(name)
        done.add(name)
        ordered.append(files[name])

    for name in files:
        visit(name)
    return ordered


def _decode(descriptor_set: FileDescriptorSet | bytes) -> FileDescriptorSet:
    if isinstance(descriptor_set, FileDescriptorSet):
        return descriptor_set
    try:
        return FileDescriptorSet.FromString(bytes(descriptor_set))
    except DecodeError as err:
        raise DescriptorSetError(f"Cannot decode file descriptor set: {err}") from err


class DynamicRegistry(ProtoRegistry):
    """Registry over the files of a ``FileDescriptorSet``.

    The set must be self-contained: every import and every fully-qualified
    type reference has to resolve within it. Anything else is rejected when the
    registry is created, never at lookup time.

    Args:
        descriptor_set: A ``FileDescriptorSet`` message or its serialized bytes.

    Raises:
        DescriptorSetError: If the set cannot be decoded or is inconsistent.
    """

    def __init__(self, descriptor_set: FileDescriptorSet | bytes) -> None:
        decoded = _decode(descriptor_set)

        files: dict[str, FileDescriptorProto] = {}
        for file in decoded.file:
            if file.name in files:
                raise DescriptorSetError(f"File {file.name} appears twice in the descriptor set", file.name)
            copied = FileDescriptorProto()
            copied.CopyFrom(file)
            files[file.name] = copied

        self._index = _build_index(files)
        _check_references(self._index, files)

        self._pool = DescriptorPool()
        for file in _dependency_order(files):
            try:
                self._pool.AddSerializedFile(file.SerializeToString())
                self._pool.FindFileByName(file.name)
            except (TypeError, KeyError, ValueError) as err:
                raise DescriptorSetError(f"Cannot load {file.name}: {err}", file.name) from err

        logger.debug("loaded %d files, %d names", len(files), len(self._index))

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> "DynamicRegistry":
        """Create a registry from a serialized descriptor set on disk."""
        with open(path, "rb") as f:
            return cls(f.read())

    def names(self, kind: DescriptorKind | None = None) -> Iterator[tuple[str, DescriptorKind]]:
        """Iterate over indexed names, optionally of a single kind, in sorted order."""
        for name in sorted(self._index):
            entry = self._index[name]
            if kind is None or entry.kind == kind:
                yield name, entry.kind

    def message_names(self) -> list[str]:
        return [name for name, _ in self.names(DescriptorKind.MESSAGE)]

    def has_message_type(self, name: str) -> bool:
        entry = self._index.get(name)
        return entry is not None and entry.kind == DescriptorKind.MESSAGE

    def resolve_message_type(self, name: str) -> ResolvedMessageType:
        logger.debug("looking up message type %s", name)
        entry = self._index.get(name)
        if entry is None:
            raise NotFoundError(name)
        if entry.kind != DescriptorKind.MESSAGE or entry.message is None:
            raise WrongKindError(name, entry.kind.value)

        message_class = message_factory.GetMessageClass(self._pool.FindMessageTypeByName(name))

        file_proto = FileDescriptorProto()
        file_proto.CopyFrom(entry.file)
        msg_proto = DescriptorProto()
        msg_proto.CopyFrom(entry.message)
        return ResolvedMessageType(
            file_descriptor=file_proto,
            message_descriptor=msg_proto,
            empty=message_class(),
            path=entry.path,
        )

    def resolve_enum_value_map(self, name: str) -> EnumValueMap | None:
        # Not supported for descriptor sets; callers fall through to message lookup.
        logger.debug("looking up enum %s", name)
        return None
