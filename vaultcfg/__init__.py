"""
vaultcfg - Configuration resolution for Vault secret engines.

Given a mounted secret engine, vaultcfg works out which configuration
records the engine type needs, reads them from Vault, provisions blank
records for the ones never written, and returns them as a bundle keyed by
flat names an editing surface can address directly.

Quick Start:
    >>> from vaultcfg import Backend, ConfigurationResolver
    >>> from vaultcfg.store import VaultClient, VaultConfig
    >>>
    >>> resolver = ConfigurationResolver(VaultClient(VaultConfig(token="...")))
    >>> bundle = await resolver.resolve(Backend(id="ssh-123", type="ssh"))
    >>> bundle["ssh-ca-config"].is_new
"""

__version__ = "0.1.0"
__license__ = "MIT"

from vaultcfg.resolution import (
    Backend,
    ConfigurationEditSession,
    ConfigurationResolver,
    NotConfigurableError,
    ResolutionBundle,
)

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Resolution
    "Backend",
    "ConfigurationResolver",
    "ConfigurationEditSession",
    "ResolutionBundle",
    "NotConfigurableError",
]
