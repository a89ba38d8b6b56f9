"""
vaultcfg record stores.

The resolution engine talks to Vault through the RecordStore protocol:
query_record, create_record (local only), and find_record.
"""

from .base import (
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    RecordStore,
    StoreClient,
    StoreConfig,
    StoreError,
    ValidationError,
)
from .schemas import (
    RECORD_CLASSES,
    AwsLeaseConfig,
    ConfigResource,
    SecretEngine,
    SshCaConfig,
    record_class_for,
)
from .vault import MOUNT_RECORD_CLASS, VaultClient, VaultConfig

__all__ = [
    # Base
    "RecordStore",
    "StoreClient",
    "StoreConfig",
    # Exceptions
    "StoreError",
    "AuthenticationError",
    "RateLimitError",
    "NotFoundError",
    "ValidationError",
    # Records
    "ConfigResource",
    "SshCaConfig",
    "AwsLeaseConfig",
    "SecretEngine",
    "RECORD_CLASSES",
    "record_class_for",
    # Vault
    "VaultClient",
    "VaultConfig",
    "MOUNT_RECORD_CLASS",
]
