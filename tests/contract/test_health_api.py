"""Contract tests for health check and catalog availability."""

import pytest
from fastapi.testclient import TestClient

from blindquote.config import settings
from blindquote.services.service_factory import clear_all_service_caches


pytestmark = pytest.mark.contract


class TestHealthEndpoint:
    """Contract tests for GET /api/v1/health."""

    def test_health_check(self, client: TestClient):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["catalog_ready"] is True
        assert data["store"]["max_sessions"] == settings.max_sessions


class TestCatalogNotReady:
    """Session creation requires a loaded rate catalog."""

    @pytest.fixture
    def missing_rate_source(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "rate_source_path", str(tmp_path / "missing.yaml"))
        clear_all_service_caches()
        yield
        monkeypatch.undo()
        clear_all_service_caches()

    def test_create_session_unavailable(self, client: TestClient, missing_rate_source):
        response = client.post("/api/v1/sessions", json={})

        assert response.status_code == 503
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "CATALOG_NOT_READY"

    def test_health_reports_catalog(self, client: TestClient, missing_rate_source):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["catalog_ready"] is False
