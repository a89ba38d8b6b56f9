"""
Tests for the HTTP surface.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from vaultcfg.app.dependencies import get_resolver, get_store
from vaultcfg.app.main import app
from vaultcfg.resolution import ConfigurationResolver
from vaultcfg.store import AuthenticationError, SecretEngine, VaultClient, VaultConfig


@pytest.fixture
def client(store):
    """TestClient wired to the in-memory store."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_resolver] = lambda: ConfigurationResolver(store)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestConfigurationEndpoint:
    """Tests for GET /api/v1/backends/{backend}/configuration."""

    def test_ssh_bundle(self, client, store, ssh_unconfigured_error):
        store.mounts["ssh-123"] = SecretEngine(id="ssh-123", type="ssh")
        store.failures[("ssh/ca-config", "ssh-123")] = ssh_unconfigured_error

        response = client.get("/api/v1/backends/ssh-123/configuration")

        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "ssh"
        assert data["id"] == "ssh-123"
        assert data["ssh-ca-config"]["is_new"] is True

    def test_nested_mount_path(self, client, store):
        store.mounts["team/ssh"] = SecretEngine(id="team/ssh", type="ssh")

        response = client.get("/api/v1/backends/team/ssh/configuration")

        assert response.status_code == 200
        assert "ssh-ca-config" in response.json()

    def test_not_configurable_is_404(self, client, store):
        store.mounts["kv"] = SecretEngine(id="kv", type="kv")

        response = client.get("/api/v1/backends/kv/configuration")

        assert response.status_code == 404
        assert ("query", "ssh/ca-config", "kv") not in store.calls

    def test_unknown_mount_is_404(self, client):
        response = client.get("/api/v1/backends/missing/configuration")
        assert response.status_code == 404

    def test_legacy_record(self, client, store, aws_mount):
        store.mounts["aws-prod"] = aws_mount

        response = client.get("/api/v1/backends/aws-prod/configuration")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "aws-prod"
        assert data["type"] == "aws"
        assert data["accessor"] == "aws_1234"

    def test_store_4xx_passes_through(self, client, store):
        store.mounts["ssh-123"] = SecretEngine(id="ssh-123", type="ssh")
        store.failures[("ssh/ca-config", "ssh-123")] = AuthenticationError(
            "Authentication failed", "vault", status_code=403, errors=["permission denied"]
        )

        response = client.get("/api/v1/backends/ssh-123/configuration")

        assert response.status_code == 403
        assert response.json()["detail"] == "permission denied"

    def test_store_5xx_is_bad_gateway(self, client, store, server_error):
        store.mounts["ssh-123"] = SecretEngine(id="ssh-123", type="ssh")
        store.failures[("ssh/ca-config", "ssh-123")] = server_error

        response = client.get("/api/v1/backends/ssh-123/configuration")

        assert response.status_code == 502

    def test_malformed_vault_record_is_bad_gateway(self):
        def handler(request):
            if request.url.path == "/v1/sys/mounts/ssh-123":
                return httpx.Response(200, json={"data": {"type": "ssh"}})
            return httpx.Response(200, json={"data": {"key_bits": "not-a-number"}})

        vault = VaultClient(
            VaultConfig(token="t", max_retries=0), transport=httpx.MockTransport(handler)
        )
        app.dependency_overrides[get_store] = lambda: vault
        app.dependency_overrides[get_resolver] = lambda: ConfigurationResolver(vault)
        try:
            response = TestClient(app).get("/api/v1/backends/ssh-123/configuration")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 502
        assert "Malformed response" in response.json()["detail"]


class TestHealth:
    """Tests for /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["configurable_engines"] == ["aws", "ssh"]
