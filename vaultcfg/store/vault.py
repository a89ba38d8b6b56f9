"""
Vault API Client for vaultcfg.

This client implements the RecordStore boundary over Vault's HTTP API.
It handles authentication, namespaces, response envelopes, and maps
Vault's ``{"errors": [...]}`` bodies onto StoreError.

Usage:
    async with VaultClient(config) as client:
        mount = await client.find_record("secret-engine", "ssh-123")

        ca = await client.query_record(
            "ssh/ca-config",
            backend="ssh-123",
            type="ssh",
        )

API Reference:
    https://developer.hashicorp.com/vault/api-docs
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError as SchemaError

from vaultcfg.store.base import StoreClient, StoreConfig, StoreError
from vaultcfg.store.schemas import ConfigResource, SecretEngine, record_class_for

logger = logging.getLogger(__name__)

MOUNT_RECORD_CLASS = "secret-engine"


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class VaultConfig(StoreConfig):
    """Configuration for the Vault client."""

    base_url: str = "http://127.0.0.1:8200"
    namespace: str | None = None

    def __post_init__(self):
        if not self.base_url:
            raise ValueError("Vault address is required")


# =============================================================================
# Client
# =============================================================================


class VaultClient(StoreClient):
    """
    Async client for the Vault HTTP API.

    Provides:
    - query_record: read one configuration record of a mount
    - create_record: build a provisional record locally (no request)
    - find_record: read a mount record by path
    """

    def __init__(self, config: VaultConfig, **kwargs):
        super().__init__(config, **kwargs)
        self._config: VaultConfig = config

    @property
    def name(self) -> str:
        return "vault"

    def _get_auth_headers(self) -> dict[str, str]:
        headers = {}
        if self._config.token:
            headers["X-Vault-Token"] = self._config.token
        if self._config.namespace:
            headers["X-Vault-Namespace"] = self._config.namespace
        return headers

    def _parse_errors(self, response: httpx.Response) -> list[str]:
        try:
            body = response.json()
        except ValueError:
            return []
        if not isinstance(body, dict):
            return []
        return [str(e) for e in body.get("errors") or []]

    def _malformed(self, response: httpx.Response, reason: object) -> StoreError:
        return StoreError(
            f"Malformed response: {reason}",
            self.name,
            status_code=response.status_code,
            response_body=response.text,
        )

    def _read_data(self, response: httpx.Response) -> dict[str, Any]:
        """Unwrap Vault's ``{"data": {...}}`` envelope."""
        try:
            body = response.json()
        except ValueError as e:
            raise self._malformed(response, e) from e

        if not isinstance(body, dict):
            raise self._malformed(response, "expected a JSON object")

        data = body.get("data")
        return data if isinstance(data, dict) else body

    # =========================================================================
    # Record Store
    # =========================================================================

    async def query_record(
        self, resource_class: str, *, backend: str, type: str
    ) -> ConfigResource:
        """
        Read a configuration record for a mount.

        Raises:
            StoreError: Any failure, with the status code Vault returned
        """
        record_cls = record_class_for(resource_class)
        response = await self._request("GET", record_cls.api_path.format(backend=backend))
        data = self._read_data(response)

        try:
            record = record_cls(**{**data, "backend": backend, "type": type})
        except SchemaError as e:
            raise self._malformed(response, e) from e

        logger.debug(f"[vault] Loaded {resource_class} for backend={backend}")
        return record

    def create_record(
        self, resource_class: str, *, backend: str, type: str
    ) -> ConfigResource:
        """Build a provisional record. Nothing is sent to Vault."""
        return record_class_for(resource_class).provisional(backend=backend, type=type)

    async def find_record(self, resource_class: str, record_id: str) -> SecretEngine:
        """Read a mount record by its path."""
        if resource_class != MOUNT_RECORD_CLASS:
            raise ValueError(f"Unsupported record class for lookup: '{resource_class}'")

        path = record_id.strip("/")
        response = await self._request("GET", f"/v1/sys/mounts/{path}")
        try:
            return SecretEngine.from_api(path, self._read_data(response))
        except SchemaError as e:
            raise self._malformed(response, e) from e
