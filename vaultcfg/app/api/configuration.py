"""
Secret engine configuration endpoints.

GET /backends/{backend}/configuration looks the mount up, resolves its
configuration records and returns them keyed by normalized name. Engines
without a configuration surface answer 404.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from vaultcfg.app.dependencies import get_resolver, get_store
from vaultcfg.resolution import ConfigurationResolver, NotConfigurableError
from vaultcfg.store import MOUNT_RECORD_CLASS, NotFoundError, StoreError, VaultClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/backends", tags=["configuration"])


def _http_status(error: StoreError) -> int:
    """Vault's own 4xx passes through; anything else is a bad gateway."""
    if error.status_code and 400 <= error.status_code < 500:
        return error.status_code
    return 502


@router.get("/{backend:path}/configuration")
async def get_configuration(
    backend: str,
    store: VaultClient = Depends(get_store),
    resolver: ConfigurationResolver = Depends(get_resolver),
) -> dict[str, Any]:
    """Resolve the editable configuration of a mounted secret engine."""
    try:
        mount = await store.find_record(MOUNT_RECORD_CLASS, backend)
        model = await resolver.resolve(mount.as_backend())
    except (NotConfigurableError, NotFoundError) as e:
        logger.info(f"[api] No configuration for backend={backend}: {e}")
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StoreError as e:
        logger.warning(f"[api] Resolution failed for backend={backend}: {e}")
        raise HTTPException(status_code=_http_status(e), detail=e.message) from e

    return model.to_dict()
