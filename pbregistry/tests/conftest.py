"""Unit tests configuration file."""

import pytest
from google.protobuf import text_format
from google.protobuf.descriptor_pb2 import FileDescriptorProto, FileDescriptorSet
from google.protobuf.descriptor_pool import DescriptorPool

ADDRESS_BOOK_PROTO = """
name: "testdata/address_book.proto"
package: "testdata"
syntax: "proto3"
message_type {
  name: "Person"
  field { name: "name" number: 1 label: LABEL_OPTIONAL type: TYPE_STRING json_name: "name" }
  field { name: "id" number: 2 label: LABEL_OPTIONAL type: TYPE_INT32 json_name: "id" }
  field {
    name: "phones" number: 4 label: LABEL_REPEATED type: TYPE_MESSAGE
    type_name: ".testdata.Person.PhoneNumber" json_name: "phones"
  }
  nested_type {
    name: "PhoneNumber"
    field { name: "number" number: 1 label: LABEL_OPTIONAL type: TYPE_STRING json_name: "number" }
    field {
      name: "type" number: 2 label: LABEL_OPTIONAL type: TYPE_ENUM
      type_name: ".testdata.Person.PhoneType" json_name: "type"
    }
  }
  enum_type {
    name: "PhoneType"
    value { name: "MOBILE" number: 0 }
    value { name: "HOME" number: 1 }
    value { name: "WORK" number: 2 }
  }
}
message_type {
  name: "AddressBook"
  field {
    name: "people" number: 1 label: LABEL_REPEATED type: TYPE_MESSAGE
    type_name: ".testdata.Person" json_name: "people"
  }
}
enum_type {
  name: "Visibility"
  value { name: "VISIBILITY_UNSPECIFIED" number: 0 }
  value { name: "PUBLIC" number: 1 }
}
service {
  name: "AddressBookService"
  method { name: "Get" input_type: ".testdata.AddressBook" output_type: ".testdata.AddressBook" }
}
"""

DIRECTORY_PROTO = """
name: "testdata/directory.proto"
package: "testdata.directory"
dependency: "testdata/address_book.proto"
syntax: "proto3"
message_type {
  name: "Directory"
  field {
    name: "book" number: 1 label: LABEL_OPTIONAL type: TYPE_MESSAGE
    type_name: ".testdata.AddressBook" json_name: "book"
  }
}
"""

# The same file name and package in two pools, with different layouts.
STATIC_COMPAT_PROTO = """
name: "compat/timestamp.proto"
package: "compat"
syntax: "proto3"
message_type {
  name: "Timestamp"
  field { name: "seconds" number: 1 label: LABEL_OPTIONAL type: TYPE_INT64 json_name: "seconds" }
  field { name: "nanos" number: 2 label: LABEL_OPTIONAL type: TYPE_INT32 json_name: "nanos" }
  nested_type {
    name: "Zone"
    field { name: "offset" number: 1 label: LABEL_OPTIONAL type: TYPE_INT32 json_name: "offset" }
  }
}
message_type { name: "StaticOnly" }
enum_type {
  name: "Precision"
  value { name: "SECONDS" number: 0 }
  value { name: "MILLIS" number: 1 }
}
"""

LEGACY_COMPAT_PROTO = """
name: "compat/timestamp.proto"
package: "compat"
syntax: "proto3"
message_type {
  name: "Timestamp"
  field { name: "value" number: 1 label: LABEL_OPTIONAL type: TYPE_STRING json_name: "value" }
}
message_type { name: "LegacyOnly" }
enum_type {
  name: "Precision"
  value { name: "COARSE" number: 0 }
}
enum_type {
  name: "LegacyFlag"
  value { name: "OFF" number: 0 }
  value { name: "ON" number: 1 }
}
"""

TWIN_PROTO = """
name: "twin/twin.proto"
package: "twin"
syntax: "proto3"
message_type { name: "Inner" }
message_type {
  name: "Outer"
  field { name: "text" number: 1 label: LABEL_OPTIONAL type: TYPE_STRING json_name: "text" oneof_index: 0 }
  nested_type { name: "Inner" }
  oneof_decl { name: "choice" }
}
"""


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def parse_file(text: str) -> FileDescriptorProto:
    return text_format.Parse(text, FileDescriptorProto())


def build_pool(*texts: str) -> DescriptorPool:
    pool = DescriptorPool()
    for text in texts:
        pool.AddSerializedFile(parse_file(text).SerializeToString())
    return pool


@pytest.fixture
def address_book_set() -> FileDescriptorSet:
    return FileDescriptorSet(file=[parse_file(ADDRESS_BOOK_PROTO), parse_file(DIRECTORY_PROTO)])


@pytest.fixture
def static_pool() -> DescriptorPool:
    return build_pool(STATIC_COMPAT_PROTO)


@pytest.fixture
def legacy_pool() -> DescriptorPool:
    return build_pool(LEGACY_COMPAT_PROTO)


@pytest.fixture
def twin_set() -> FileDescriptorSet:
    return FileDescriptorSet(file=[parse_file(TWIN_PROTO)])


@pytest.fixture
def twin_pool() -> DescriptorPool:
    return build_pool(TWIN_PROTO)
