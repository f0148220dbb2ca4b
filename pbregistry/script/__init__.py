"""Script-facing access to protobuf packages."""

from .package import ProtoModule as ProtoModule
from .package import ProtoPackage as ProtoPackage
from .values import EnumType as EnumType
from .values import MessageType as MessageType
