"""
Resource fetching and fallback provisioning.

A descriptor read has three outcomes:
    1. The record exists: it is returned.
    2. The record was never written: None is returned, and the caller
       provisions a blank record in its place.
    3. Anything else: the exception propagates unchanged.

What counts as "never written" is decided by the descriptor's own
absence predicate, so one engine's quirk never leaks into another's.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vaultcfg.store.base import StoreError

if TYPE_CHECKING:
    from vaultcfg.engines import ConfigDescriptor
    from vaultcfg.store.base import RecordStore
    from vaultcfg.store.schemas import ConfigResource

    from .models import Backend

logger = logging.getLogger(__name__)


async def fetch_resource(
    store: RecordStore,
    descriptor: ConfigDescriptor,
    backend: Backend,
) -> ConfigResource | None:
    """
    Read one configuration record for a backend.

    Returns:
        The persisted record, or None when the store confirms it is absent

    Raises:
        StoreError: Any failure the descriptor does not classify as absent
    """
    try:
        return await store.query_record(
            descriptor.name,
            backend=backend.id,
            type=backend.type,
        )
    except StoreError as e:
        if descriptor.is_absent(e.status_code, e.message):
            logger.debug(
                f"[resolver] {descriptor.name} absent for backend={backend.id} "
                f"(status={e.status_code})"
            )
            return None
        raise


def provision_resource(
    store: RecordStore,
    descriptor: ConfigDescriptor,
    backend: Backend,
) -> ConfigResource:
    """Build a provisional record in place of an absent one. Local only."""
    logger.info(f"[resolver] Provisioning new {descriptor.name} for backend={backend.id}")
    return store.create_record(descriptor.name, backend=backend.id, type=backend.type)
