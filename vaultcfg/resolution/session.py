"""
Configuration edit session.

Tracks one visit to a backend's configuration editing surface and the
navigation events around it:

    enter()            -> resolve and hold the model
    will_transition()  -> leaving without a reset: re-resolve first, so a
                          save/delete made elsewhere is not served stale
    exit()             -> surface torn down: drop the model

Refresh failures are reported (log + on_error) and never raised, so a
failed refresh cannot break the navigation itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from vaultcfg.store.base import StoreError

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .models import Backend
    from .resolver import ConfigurationResolver, ResolvedModel

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[Exception], None]


class ConfigurationEditSession:
    """One navigation into a backend's configuration surface."""

    def __init__(
        self,
        resolver: ConfigurationResolver,
        backend: Backend,
        *,
        on_error: ErrorCallback | None = None,
    ):
        self._resolver = resolver
        self.backend = backend
        self._on_error = on_error
        self.model: ResolvedModel | None = None
        self.last_error: Exception | None = None

    async def enter(self) -> ResolvedModel:
        """
        Resolve the backend on entry.

        Errors propagate so the router can render the error or 404 page.
        """
        self.model = await self._resolver.resolve(self.backend)
        self.last_error = None
        return self.model

    async def refresh(self) -> ResolvedModel | None:
        """Re-resolve, reporting failures instead of raising them."""
        try:
            self.model = await self._resolver.resolve(self.backend)
        except (StoreError, ConfigurationError) as e:
            self.last_error = e
            logger.error(f"[session] Refresh failed for backend={self.backend.id}: {e}", exc_info=True)
            if self._on_error is not None:
                self._on_error(e)
            return None

        self.last_error = None
        logger.debug(f"[session] Refreshed backend={self.backend.id}")
        return self.model

    async def will_transition(self, *, reset: bool = False) -> None:
        """Navigation away is starting. Refresh unless explicitly reset."""
        if reset:
            return
        await self.refresh()

    def exit(self, *, is_exiting: bool = True) -> None:
        """Navigation away completed."""
        if is_exiting:
            self.model = None
