"""Tests for the legacy registry and its name prefix."""

import pytest

from pbregistry.registry import LEGACY_PREFIX, InternalError, LegacyRegistry, NotFoundError, StaticRegistry
from pbregistry.registry.legacy import split_legacy_prefix


@pytest.fixture
def static(static_pool):
    return StaticRegistry(static_pool.FindFileByName("compat/timestamp.proto"))


@pytest.fixture
def legacy(legacy_pool, static):
    return LegacyRegistry(legacy_pool.FindFileByName("compat/timestamp.proto"), primary=static)


def describe_split_legacy_prefix():
    def strips_prefix(expect):
        expect(LEGACY_PREFIX) == "gogo:"
        expect(split_legacy_prefix("gogo:compat.Timestamp")) == (True, "compat.Timestamp")

    def leaves_other_names(expect):
        expect(split_legacy_prefix("compat.Timestamp")) == (False, "compat.Timestamp")
        expect(split_legacy_prefix("compat.gogo:Timestamp")) == (False, "compat.gogo:Timestamp")


def describe_resolve_message_type():
    def unprefixed_name_known_to_both_resolves_to_primary(expect, legacy, static_pool):
        resolved = legacy.resolve_message_type("compat.Timestamp")
        expect(resolved.empty.DESCRIPTOR is static_pool.FindMessageTypeByName("compat.Timestamp")) == True
        expect([f.name for f in resolved.message_descriptor.field]) == ["seconds", "nanos"]

    def prefixed_name_resolves_to_legacy(expect, legacy, legacy_pool):
        resolved = legacy.resolve_message_type("gogo:compat.Timestamp")
        expect(resolved.empty.DESCRIPTOR is legacy_pool.FindMessageTypeByName("compat.Timestamp")) == True
        expect([f.name for f in resolved.message_descriptor.field]) == ["value"]
        expect(resolved.full_name) == "compat.Timestamp"

    def prefixed_and_unprefixed_types_are_distinct(expect, legacy):
        primary = legacy.resolve_message_type("compat.Timestamp")
        prefixed = legacy.resolve_message_type("gogo:compat.Timestamp")
        expect(primary.empty.DESCRIPTOR is prefixed.empty.DESCRIPTOR) == False
        expect(type(primary.empty) is type(prefixed.empty)) == False

    def primary_only_name_with_prefix_is_not_found(expect, legacy):
        expect(legacy.resolve_message_type("compat.StaticOnly").full_name) == "compat.StaticOnly"
        with pytest.raises(NotFoundError) as exinfo:
            legacy.resolve_message_type("gogo:compat.StaticOnly")
        expect(exinfo.value.name) == "compat.StaticOnly"

    def legacy_only_name_falls_back(expect, legacy, legacy_pool):
        resolved = legacy.resolve_message_type("compat.LegacyOnly")
        expect(resolved.empty.DESCRIPTOR is legacy_pool.FindMessageTypeByName("compat.LegacyOnly")) == True
        expect(legacy.resolve_message_type("gogo:compat.LegacyOnly").full_name) == "compat.LegacyOnly"

    def missing_everywhere_is_not_found(legacy):
        with pytest.raises(NotFoundError):
            legacy.resolve_message_type("compat.Missing")

    def checks_legacy_registrations(expect, legacy):
        legacy.register_message("compat.Broken", "not a class")
        with pytest.raises(InternalError) as exinfo:
            legacy.resolve_message_type("gogo:compat.Broken")
        expect(str(exinfo.value)).includes("'not a class'")

    def has_message_type(expect, legacy):
        expect(legacy.has_message_type("compat.StaticOnly")) == True
        expect(legacy.has_message_type("compat.LegacyOnly")) == True
        expect(legacy.has_message_type("gogo:compat.LegacyOnly")) == True
        expect(legacy.has_message_type("gogo:compat.StaticOnly")) == False

    def defaults_to_the_default_registry(expect, legacy_pool):
        registry = LegacyRegistry(legacy_pool.FindFileByName("compat/timestamp.proto"))
        expect(registry.resolve_message_type("google.protobuf.Timestamp").full_name) == "google.protobuf.Timestamp"
        with pytest.raises(NotFoundError):
            registry.resolve_message_type("gogo:google.protobuf.Timestamp")


def describe_resolve_enum_value_map():
    def unprefixed_name_known_to_both_resolves_to_primary(expect, legacy):
        expect(dict(legacy.resolve_enum_value_map("compat.Precision"))) == {"SECONDS": 0, "MILLIS": 1}

    def prefixed_name_resolves_to_legacy(expect, legacy):
        expect(dict(legacy.resolve_enum_value_map("gogo:compat.Precision"))) == {"COARSE": 0}

    def legacy_only_enum_falls_back(expect, legacy):
        expect(dict(legacy.resolve_enum_value_map("compat.LegacyFlag"))) == {"OFF": 0, "ON": 1}

    def returns_none_when_missing(expect, legacy):
        expect(legacy.resolve_enum_value_map("compat.Missing")) == None
        expect(legacy.resolve_enum_value_map("gogo:compat.Missing")) == None
