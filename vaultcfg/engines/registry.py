"""
Engine Capability Registry.

Static tables describing which secret engines can be configured and which
configuration records each engine type needs.

Two tables, kept separate on purpose:
    CONFIGURABLE_SECRET_ENGINES: gates whether resolution is attempted.
    CONFIG_DESCRIPTORS: the records to resolve for an engine type.

An engine type can appear in one and not the other (aws is configurable
but still keeps its settings on the mount record).

Adding an engine:
    Insert a row into CONFIG_DESCRIPTORS. Descriptor names must stay
    unique per engine type after "/" is flattened to "-".
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

# Predicate over (status_code, error message) deciding if a failed read
# means "this record has never been written".
AbsencePredicate = Callable[[int | None, str], bool]

SSH_KEYS_UNCONFIGURED = "keys haven't been configured yet"


def is_not_found(status_code: int | None, message: str) -> bool:
    """Default absence rule: the store answered 404."""
    return status_code == 404


def ssh_keys_unconfigured(status_code: int | None, message: str) -> bool:
    """
    Absence rule for the SSH CA record.

    Vault answers 400 instead of 404 when the CA has never been set up.
    """
    if is_not_found(status_code, message):
        return True
    return status_code == 400 and message == SSH_KEYS_UNCONFIGURED


@dataclass(frozen=True, slots=True)
class ConfigDescriptor:
    """One configuration record required by an engine type."""

    name: str
    engine_type: str
    is_absent: AbsencePredicate = is_not_found


CONFIGURABLE_SECRET_ENGINES: frozenset[str] = frozenset({"aws", "ssh"})

# TODO: add aws/lease-config and aws/root-config rows once aws leaves the legacy mount-record path
CONFIG_DESCRIPTORS: dict[str, tuple[ConfigDescriptor, ...]] = {
    "ssh": (ConfigDescriptor("ssh/ca-config", "ssh", is_absent=ssh_keys_unconfigured),),
}


def is_configurable(engine_type: str) -> bool:
    """Check the allow-list."""
    return engine_type in CONFIGURABLE_SECRET_ENGINES


def descriptors_for(engine_type: str) -> tuple[ConfigDescriptor, ...]:
    """Descriptors for an engine type, in declaration order. Empty if unknown."""
    return CONFIG_DESCRIPTORS.get(engine_type, ())
