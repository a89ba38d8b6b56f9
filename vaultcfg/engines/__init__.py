"""
Secret engine capability tables.
"""

from .registry import (
    CONFIG_DESCRIPTORS,
    CONFIGURABLE_SECRET_ENGINES,
    SSH_KEYS_UNCONFIGURED,
    AbsencePredicate,
    ConfigDescriptor,
    descriptors_for,
    is_configurable,
    is_not_found,
    ssh_keys_unconfigured,
)

__all__ = [
    "AbsencePredicate",
    "ConfigDescriptor",
    "CONFIG_DESCRIPTORS",
    "CONFIGURABLE_SECRET_ENGINES",
    "SSH_KEYS_UNCONFIGURED",
    "descriptors_for",
    "is_configurable",
    "is_not_found",
    "ssh_keys_unconfigured",
]
