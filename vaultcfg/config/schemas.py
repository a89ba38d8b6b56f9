"""
Configuration Schemas for vaultcfg.

Security:
    The Vault token uses SecretStr to prevent accidental logging.
    Access the value with `.get_secret_value()`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr


class AppSettings(BaseModel):
    """
    Application settings model.

    Populated from VAULTCFG_* environment variables by
    vaultcfg.app.dependencies.get_settings().
    """

    # Service identity
    service_name: str = "vaultcfg"
    environment: str = "development"
    debug: bool = False

    # Vault connection
    vault_addr: str = Field("http://127.0.0.1:8200", description="Vault server address")
    vault_token: SecretStr = Field(default=SecretStr(""), description="Vault token")
    vault_namespace: str | None = Field(None, description="Vault Enterprise namespace")
    timeout: float = Field(30.0, gt=0)
    max_retries: int = Field(3, ge=0)

    # Resolution
    concurrent_fetch: bool = True
