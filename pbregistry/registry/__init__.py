"""Protobuf message type registries."""

from .adapter import from_message_class as from_message_class
from .dynamic import DescriptorKind as DescriptorKind
from .dynamic import DynamicRegistry as DynamicRegistry
from .errors import *
from .legacy import LEGACY_PREFIX as LEGACY_PREFIX
from .legacy import LegacyRegistry as LegacyRegistry
from .legacy import split_legacy_prefix as split_legacy_prefix
from .static import StaticRegistry as StaticRegistry
from .static import default_registry as default_registry
from .types import EnumValueMap as EnumValueMap
from .types import ProtoRegistry as ProtoRegistry
from .types import ResolvedMessageType as ResolvedMessageType
