"""
Pydantic schemas for Vault records.

Configuration records come in two lifecycle states:
    - persisted: loaded from Vault (is_new is False)
    - provisional: constructed locally, not yet written (is_new is True)

Record classes are looked up by their resource class name, e.g.
"ssh/ca-config", through RECORD_CLASSES.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

if TYPE_CHECKING:
    from vaultcfg.resolution.models import Backend

# =============================================================================
# Configuration Records
# =============================================================================


class ConfigResource(BaseModel):
    """
    Base class for a secret engine configuration record.

    Every record is scoped to one mount (backend) and one engine type.
    Subclasses declare api_path, the URL template the record is read from.
    """

    model_config = ConfigDict(extra="allow")

    api_path: ClassVar[str] = ""

    backend: str = Field(..., description="Mount path of the secret engine")
    type: str = Field(..., description="Secret engine type")

    _is_new: bool = PrivateAttr(default=False)

    @property
    def is_new(self) -> bool:
        """True while the record only exists locally."""
        return self._is_new

    @classmethod
    def provisional(cls, *, backend: str, type: str) -> ConfigResource:
        """Build a blank, unsaved record for a mount."""
        record = cls(backend=backend, type=type)
        record._is_new = True
        return record

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses, including lifecycle state."""
        return {**self.model_dump(), "is_new": self.is_new}


class SshCaConfig(ConfigResource):
    """SSH engine CA configuration (``/config/ca``)."""

    api_path: ClassVar[str] = "/v1/{backend}/config/ca"

    public_key: str = ""
    private_key: str = ""
    generate_signing_key: bool = False
    key_type: str = ""
    key_bits: int = 0


class AwsLeaseConfig(ConfigResource):
    """AWS engine lease configuration (``/config/lease``)."""

    api_path: ClassVar[str] = "/v1/{backend}/config/lease"

    lease: str = ""
    lease_max: str = ""


RECORD_CLASSES: dict[str, type[ConfigResource]] = {
    "ssh/ca-config": SshCaConfig,
    "aws/lease-config": AwsLeaseConfig,
}


def record_class_for(resource_class: str) -> type[ConfigResource]:
    """Get the record class registered under a resource class name."""
    try:
        return RECORD_CLASSES[resource_class]
    except KeyError:
        raise ValueError(f"No record class registered for '{resource_class}'") from None


# =============================================================================
# Mount Records
# =============================================================================


class SecretEngine(BaseModel):
    """
    A mounted secret engine, as returned by ``/sys/mounts/{path}``.

    Engines that have not moved to dedicated configuration records keep
    their settings here (lease and lease_max for aws).
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Mount path without trailing slash")
    type: str
    description: str = ""
    accessor: str = ""
    local: bool = False
    seal_wrap: bool = False
    external_entropy_access: bool = False
    plugin_version: str = ""
    config: dict[str, Any] = Field(default_factory=dict)
    options: dict[str, Any] | None = None

    # Hydrated from the engine's lease endpoint for legacy engines
    lease: str = ""
    lease_max: str = ""

    @classmethod
    def from_api(cls, path: str, data: dict[str, Any]) -> SecretEngine:
        """Build a mount record from a ``/sys/mounts`` payload."""
        return cls(**{**data, "id": path.strip("/")})

    def as_backend(self) -> Backend:
        """Return the Backend identity for this mount."""
        from vaultcfg.resolution.models import Backend

        return Backend(id=self.id, type=self.type)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return self.model_dump()
