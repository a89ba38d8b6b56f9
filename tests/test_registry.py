"""
Tests for the engine capability tables and key normalization.
"""

import pytest

from vaultcfg.engines import (
    CONFIG_DESCRIPTORS,
    CONFIGURABLE_SECRET_ENGINES,
    ConfigDescriptor,
    descriptors_for,
    is_configurable,
    is_not_found,
    ssh_keys_unconfigured,
)
from vaultcfg.resolution import normalize_key

# =============================================================================
# Registry Tests
# =============================================================================


class TestRegistry:
    """Tests for descriptor and allow-list lookups."""

    def test_ssh_descriptors(self):
        descriptors = descriptors_for("ssh")
        assert [d.name for d in descriptors] == ["ssh/ca-config"]
        assert all(d.engine_type == "ssh" for d in descriptors)

    def test_unknown_type_has_no_descriptors(self):
        assert descriptors_for("unsupported-engine") == ()

    def test_configurable_but_not_in_registry(self):
        """aws is allowed but still has no descriptor rows."""
        assert is_configurable("aws")
        assert descriptors_for("aws") == ()

    def test_allow_list(self):
        assert is_configurable("ssh")
        assert not is_configurable("kv")
        assert not is_configurable("unsupported-engine")

    def test_registry_types_are_configurable(self):
        assert set(CONFIG_DESCRIPTORS) <= CONFIGURABLE_SECRET_ENGINES

    def test_descriptor_immutable(self):
        descriptor = descriptors_for("ssh")[0]
        with pytest.raises(AttributeError):
            descriptor.name = "changed"

    def test_default_absence_rule(self):
        descriptor = ConfigDescriptor("aws/root-config", "aws")
        assert descriptor.is_absent is is_not_found


# =============================================================================
# Absence Predicate Tests
# =============================================================================


class TestAbsencePredicates:
    """Tests for per-descriptor absence rules."""

    def test_not_found(self):
        assert is_not_found(404, "")
        assert not is_not_found(400, "keys haven't been configured yet")
        assert not is_not_found(500, "")
        assert not is_not_found(None, "")

    def test_ssh_unconfigured_400(self):
        assert ssh_keys_unconfigured(400, "keys haven't been configured yet")

    def test_ssh_still_accepts_404(self):
        assert ssh_keys_unconfigured(404, "")

    def test_ssh_other_400_is_not_absent(self):
        assert not ssh_keys_unconfigured(400, "invalid key_type")
        assert not ssh_keys_unconfigured(500, "keys haven't been configured yet")


# =============================================================================
# Normalizer Tests
# =============================================================================


class TestNormalizeKey:
    """Tests for bundle key normalization."""

    def test_replaces_separator(self):
        assert normalize_key("ssh/ca-config") == "ssh-ca-config"

    def test_replaces_every_separator(self):
        assert normalize_key("aws/root/config") == "aws-root-config"

    def test_reserved_keys_untouched(self):
        assert normalize_key("type") == "type"
        assert normalize_key("id") == "id"

    def test_idempotent(self):
        once = normalize_key("ssh/ca-config")
        assert normalize_key(once) == once

    def test_injective_over_registry(self):
        for engine_type, descriptors in CONFIG_DESCRIPTORS.items():
            keys = [normalize_key(d.name) for d in descriptors]
            assert len(keys) == len(set(keys)), engine_type
            assert not {"type", "id"} & set(keys)
