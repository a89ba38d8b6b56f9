"""
Pytest configuration and fixtures for vaultcfg tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from vaultcfg.store import (  # noqa: E402
    NotFoundError,
    SecretEngine,
    StoreError,
    ValidationError,
    record_class_for,
)


class FakeStore:
    """
    In-memory RecordStore.

    records:  (resource_class, backend) -> field dict
    failures: (resource_class, backend) -> exception to raise
    mounts:   backend -> SecretEngine
    Every remote call is appended to `calls`.
    """

    def __init__(self):
        self.records: dict[tuple[str, str], dict] = {}
        self.failures: dict[tuple[str, str], Exception] = {}
        self.mounts: dict[str, SecretEngine] = {}
        self.calls: list[tuple[str, str, str]] = []
        self.created: list[tuple[str, str, str]] = []

    async def query_record(self, resource_class, *, backend, type):
        self.calls.append(("query", resource_class, backend))
        key = (resource_class, backend)
        if key in self.failures:
            raise self.failures[key]
        if key not in self.records:
            raise NotFoundError("Resource not found", "vault", status_code=404)
        return record_class_for(resource_class)(
            **{**self.records[key], "backend": backend, "type": type}
        )

    def create_record(self, resource_class, *, backend, type):
        self.created.append(("create", resource_class, backend))
        return record_class_for(resource_class).provisional(backend=backend, type=type)

    async def find_record(self, resource_class, record_id):
        self.calls.append(("find", resource_class, record_id))
        if record_id not in self.mounts:
            raise NotFoundError("Resource not found", "vault", status_code=404)
        return self.mounts[record_id]


@pytest.fixture
def store():
    """Empty in-memory store."""
    return FakeStore()


@pytest.fixture
def ssh_unconfigured_error():
    """The error Vault returns when an SSH CA was never set up."""
    return ValidationError(
        "Validation error",
        "vault",
        status_code=400,
        errors=["keys haven't been configured yet"],
    )


@pytest.fixture
def server_error():
    """A non-absence failure."""
    return StoreError("Request failed", "vault", status_code=500, errors=["internal error"])


@pytest.fixture
def aws_mount():
    """Mount record of a legacy (aws) engine."""
    return SecretEngine(id="aws-prod", type="aws", description="AWS credentials", accessor="aws_1234")
