"""
vaultcfg Resolution Engine.

Turns a mounted secret engine into the set of configuration records its
editing surface needs.

Components:
    - ConfigurationResolver: allow-list check, descriptor lookup, fetch or
      provision, key normalization, legacy mount-record path
    - fetch_resource / provision_resource: one descriptor's read
    - normalize_key: "ssh/ca-config" -> "ssh-ca-config"
    - ConfigurationEditSession: refresh on navigation away

Usage:
    resolver = ConfigurationResolver(store)
    bundle = await resolver.resolve(Backend(id="ssh-123", type="ssh"))
"""

from .errors import ConfigurationError, NotConfigurableError
from .fetcher import fetch_resource, provision_resource
from .models import RESERVED_KEYS, Backend, ResolutionBundle
from .normalizer import normalize_key
from .resolver import (
    LEGACY_ENGINE_TYPE,
    ConfigurationResolver,
    ResolvedModel,
)
from .session import ConfigurationEditSession

__all__ = [
    # Models
    "Backend",
    "ResolutionBundle",
    "ResolvedModel",
    "RESERVED_KEYS",
    # Errors
    "ConfigurationError",
    "NotConfigurableError",
    # Engine
    "ConfigurationResolver",
    "LEGACY_ENGINE_TYPE",
    "fetch_resource",
    "provision_resource",
    "normalize_key",
    # Navigation
    "ConfigurationEditSession",
]
