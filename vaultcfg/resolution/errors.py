"""
Resolution errors.

Store failures (vaultcfg.store.StoreError) are not wrapped here: they reach
the caller unchanged.
"""

from __future__ import annotations


class ConfigurationError(Exception):
    """Base exception for configuration resolution errors."""

    status_code: int | None = None


class NotConfigurableError(ConfigurationError):
    """Raised when a backend's engine type has no configuration surface."""

    status_code = 404

    def __init__(self, engine_type: str | None, backend: str | None = None):
        self.engine_type = engine_type
        self.backend = backend
        super().__init__(
            f"Secret engine type '{engine_type}' is not configurable"
            + (f" (backend={backend})" if backend else "")
        )
