"""
Configuration Resolver.

Builds the editable configuration of a secret engine mount.

Flow:
    1. Reject engine types that are not configurable (before any request)
    2. Route the legacy engine type to its mount-record path
    3. Look up the engine's descriptors
    4. Read each record; provision a blank one where it was never written
    5. Return a bundle keyed by normalized descriptor name

Resolution is all-or-nothing: any failure other than a confirmed absence
propagates and no bundle is returned. Bundles are built fresh on every
call.

Usage:
    resolver = ConfigurationResolver(VaultClient(config))

    bundle = await resolver.resolve(Backend(id="ssh-123", type="ssh"))
    bundle["ssh-ca-config"].is_new  # True if the CA was never configured
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from vaultcfg.engines import descriptors_for, is_configurable
from vaultcfg.store.base import StoreError
from vaultcfg.store.schemas import ConfigResource, SecretEngine
from vaultcfg.store.vault import MOUNT_RECORD_CLASS

from .errors import NotConfigurableError
from .fetcher import fetch_resource, provision_resource
from .models import Backend, ResolutionBundle
from .normalizer import normalize_key

if TYPE_CHECKING:
    from vaultcfg.engines import ConfigDescriptor
    from vaultcfg.store.base import RecordStore

logger = logging.getLogger(__name__)

# aws still keeps its configuration on the mount record
LEGACY_ENGINE_TYPE = "aws"
LEGACY_LEASE_RECORD = "aws/lease-config"

ResolvedModel = ResolutionBundle | SecretEngine


class ConfigurationResolver:
    """
    Resolves the configuration records of a secret engine mount.

    The resolver holds no per-call state; concurrent resolve() calls each
    build their own bundle.
    """

    def __init__(self, store: RecordStore, *, concurrent: bool = True):
        """
        Initialize resolver.

        Args:
            store: Record store (VaultClient in production)
            concurrent: Read descriptors concurrently instead of one by one
        """
        self._store = store
        self._concurrent = concurrent

    async def resolve(self, backend: Backend | None) -> ResolvedModel:
        """
        Resolve configuration for a backend.

        Returns:
            ResolutionBundle, or the mount record itself for the legacy type

        Raises:
            NotConfigurableError: Engine type is not in the allow-list
            StoreError: Any read failure not classified as absent
        """
        if backend is None or not is_configurable(backend.type):
            raise NotConfigurableError(
                backend.type if backend else None,
                backend.id if backend else None,
            )

        if backend.type == LEGACY_ENGINE_TYPE:
            return await self.resolve_legacy(backend)

        descriptors = descriptors_for(backend.type)
        logger.info(
            f"[resolver] Resolving backend={backend.id} type={backend.type} "
            f"descriptors={len(descriptors)}"
        )

        resources = await self._resolve_all(descriptors, backend)

        bundle = ResolutionBundle(type=backend.type, id=backend.id)
        for descriptor, resource in zip(descriptors, resources):
            bundle.resources[normalize_key(descriptor.name)] = resource

        logger.info(
            f"[resolver] Resolved backend={backend.id} | "
            f"keys={list(bundle.resources)} | "
            f"provisioned={sum(1 for r in resources if r.is_new)}"
        )
        return bundle

    async def _resolve_all(
        self,
        descriptors: tuple[ConfigDescriptor, ...],
        backend: Backend,
    ) -> list[ConfigResource]:
        """Resolve every descriptor, in descriptor order."""
        if not self._concurrent or len(descriptors) < 2:
            return [await self._resolve_one(d, backend) for d in descriptors]

        tasks = [asyncio.ensure_future(self._resolve_one(d, backend)) for d in descriptors]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

    async def _resolve_one(
        self,
        descriptor: ConfigDescriptor,
        backend: Backend,
    ) -> ConfigResource:
        resource = await fetch_resource(self._store, descriptor, backend)
        if resource is None:
            resource = provision_resource(self._store, descriptor, backend)
        return resource

    # =========================================================================
    # Legacy mount-record path
    # =========================================================================

    async def resolve_legacy(self, backend: Backend) -> SecretEngine:
        """
        Return the backend's own mount record as its configuration.

        Errors reading the mount record propagate unchanged.
        """
        logger.info(f"[resolver] Resolving legacy backend={backend.id} type={backend.type}")

        record = await self._store.find_record(MOUNT_RECORD_CLASS, backend.id)
        await self._hydrate_legacy(record, backend)
        return record

    async def _hydrate_legacy(self, record: SecretEngine, backend: Backend) -> None:
        """Copy lease settings onto the mount record. Failures leave it as read."""
        try:
            lease = await self._store.query_record(
                LEGACY_LEASE_RECORD,
                backend=backend.id,
                type=backend.type,
            )
        except StoreError as e:
            logger.warning(f"[resolver] Lease settings unavailable for backend={backend.id}: {e}")
            return

        record.lease = lease.lease
        record.lease_max = lease.lease_max
