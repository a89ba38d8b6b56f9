"""
ConfigurationResolver Usage Examples.

Run against a dev Vault server:

    vault server -dev -dev-root-token-id=root
    vault secrets enable -path=ssh-123 ssh
    VAULT_TOKEN=root python examples/resolve_backend.py ssh-123

The first run shows the SSH CA as a new (provisional) record, because
Vault answers "keys haven't been configured yet" until a CA is written.
"""

import asyncio
import logging
import os
import sys

from vaultcfg import ConfigurationEditSession, ConfigurationResolver, NotConfigurableError
from vaultcfg.store import MOUNT_RECORD_CLASS, StoreError, VaultClient, VaultConfig


async def main(mount_path: str) -> int:
    config = VaultConfig(
        token=os.getenv("VAULT_TOKEN"),
        base_url=os.getenv("VAULT_ADDR", "http://127.0.0.1:8200"),
    )

    async with VaultClient(config) as store:
        mount = await store.find_record(MOUNT_RECORD_CLASS, mount_path)
        resolver = ConfigurationResolver(store)
        session = ConfigurationEditSession(
            resolver,
            mount.as_backend(),
            on_error=lambda e: print(f"refresh failed: {e}"),
        )

        try:
            model = await session.enter()
        except NotConfigurableError as e:
            print(e)
            return 1
        except StoreError as e:
            print(f"Vault error: {e}")
            return 1

        for key, value in model.to_dict().items():
            print(f"{key}: {value}")

        # Leaving the page without cancelling refreshes the model first
        await session.will_transition()
        session.exit()

    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "ssh")))
