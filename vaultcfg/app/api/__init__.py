"""HTTP routers for vaultcfg."""

from .configuration import router as configuration_router

__all__ = ["configuration_router"]
