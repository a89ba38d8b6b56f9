"""
Resolution data types.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from vaultcfg.store.schemas import ConfigResource

RESERVED_KEYS = ("type", "id")


@dataclass(frozen=True, slots=True)
class Backend:
    """A mounted secret engine: its path and its engine type."""

    id: str
    type: str


@dataclass
class ResolutionBundle(Mapping[str, Any]):
    """
    Configuration records resolved for one backend.

    Reads like a mapping holding "type", "id", and one entry per
    descriptor under its normalized key:

        bundle["type"]            -> "ssh"
        bundle["id"]              -> "ssh-123"
        bundle["ssh-ca-config"]   -> SshCaConfig(...)
    """

    type: str
    id: str
    resources: dict[str, ConfigResource] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        if key == "type":
            return self.type
        if key == "id":
            return self.id
        return self.resources[key]

    def __iter__(self) -> Iterator[str]:
        yield from RESERVED_KEYS
        yield from self.resources

    def __len__(self) -> int:
        return len(RESERVED_KEYS) + len(self.resources)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "type": self.type,
            "id": self.id,
            **{key: resource.to_dict() for key, resource in self.resources.items()},
        }
