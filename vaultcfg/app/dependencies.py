"""
Dependency Injection for vaultcfg.

Provides singleton instances of the Vault client and the resolver.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from vaultcfg.config.schemas import AppSettings
from vaultcfg.resolution import ConfigurationResolver
from vaultcfg.store import VaultClient, VaultConfig

logger = logging.getLogger(__name__)


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get application settings from environment.

    Uses lru_cache for singleton pattern.
    """
    return AppSettings(
        # Service
        service_name=os.getenv("VAULTCFG_SERVICE_NAME", "vaultcfg"),
        environment=os.getenv("VAULTCFG_ENVIRONMENT", "development"),
        debug=os.getenv("VAULTCFG_DEBUG", "false").lower() == "true",
        # Vault
        vault_addr=os.getenv(
            "VAULTCFG_VAULT_ADDR", os.getenv("VAULT_ADDR", "http://127.0.0.1:8200")
        ),
        vault_token=os.getenv("VAULTCFG_VAULT_TOKEN", os.getenv("VAULT_TOKEN", "")),
        vault_namespace=os.getenv("VAULTCFG_VAULT_NAMESPACE") or None,
        timeout=float(os.getenv("VAULTCFG_TIMEOUT", "30")),
        max_retries=int(os.getenv("VAULTCFG_MAX_RETRIES", "3")),
        # Resolution
        concurrent_fetch=os.getenv("VAULTCFG_CONCURRENT_FETCH", "true").lower() == "true",
    )


# Global instances (initialized on first access)
_store: VaultClient | None = None
_resolver: ConfigurationResolver | None = None


def get_store() -> VaultClient:
    """Get the Vault client, creating it on first call."""
    global _store
    if _store is None:
        settings = get_settings()
        _store = VaultClient(
            VaultConfig(
                token=settings.vault_token.get_secret_value() or None,
                base_url=settings.vault_addr,
                namespace=settings.vault_namespace,
                timeout=settings.timeout,
                max_retries=settings.max_retries,
                log_requests=settings.debug,
                log_responses=settings.debug,
            )
        )
        logger.info(f"Vault client configured for {settings.vault_addr}")
    return _store


def get_resolver() -> ConfigurationResolver:
    """Get the configuration resolver."""
    global _resolver
    if _resolver is None:
        _resolver = ConfigurationResolver(
            get_store(),
            concurrent=get_settings().concurrent_fetch,
        )
    return _resolver


async def initialize_services() -> None:
    """Initialize services at startup."""
    get_store()
    get_resolver()


async def shutdown_services() -> None:
    """Release the Vault client at shutdown."""
    global _store, _resolver
    if _store is not None:
        await _store.close()
    _store = None
    _resolver = None
