"""
Tests for OAuth API endpoints.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_oauth_service
from api.middleware.auth import get_current_user
from modules.oauth.exceptions import InvalidSessionTokenError, NoContextAssignedError
from modules.oauth.models import AppAssignmentResponse, ConnectedApp, ConnectedAppsResponse, OAuthResolveResponse
from modules.resolution.models import ResolutionSource


@pytest.fixture
def app():
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def service(app):
    mock_service = AsyncMock()
    app.dependency_overrides[get_oauth_service] = lambda: mock_service
    return mock_service


@pytest.fixture
def client(app):
    return TestClient(app)


class TestResolveClaims:
    def test_resolve(self, client, service):
        service.resolve_session.return_value = OAuthResolveResponse(
            name="Jane",
            source=ResolutionSource.CONTEXT_SPECIFIC,
            claims={"sub": "test-user-123", "name": "Jane", "context_name": "Work"},
            resolved_at="2025-01-01T00:00:00+00:00",
        )

        response = client.post("/api/oauth/resolve", headers={"Authorization": "Bearer tnp_abc123"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["claims"]["name"] == "Jane"
        assert data["source"] == "context_specific"
        service.resolve_session.assert_awaited_once_with("tnp_abc123")

    def test_missing_token(self, client, service):
        response = client.post("/api/oauth/resolve")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        service.resolve_session.assert_not_called()

    def test_invalid_token(self, client, service):
        service.resolve_session.side_effect = InvalidSessionTokenError()

        response = client.post("/api/oauth/resolve", headers={"Authorization": "Bearer tnp_expired"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"

    def test_no_context(self, client, service):
        service.resolve_session.side_effect = NoContextAssignedError("demo-hr")

        response = client.post("/api/oauth/resolve", headers={"Authorization": "Bearer tnp_abc123"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "NO_CONTEXT_ASSIGNED"


class TestAppAssignmentRoutes:
    @pytest.fixture(autouse=True)
    def signed_in(self, app, test_user):
        app.dependency_overrides[get_current_user] = lambda: test_user

    def test_get(self, client, service):
        service.get_app_assignment.return_value = AppAssignmentResponse(
            client_id="demo-hr", app_name="Demo HR", context_id="c1", context_name="Work"
        )

        response = client.get("/api/oauth/assignments/demo-hr")

        assert response.status_code == 200
        assert response.json()["data"]["context_name"] == "Work"
        service.get_app_assignment.assert_awaited_once_with("test-user-123", "demo-hr")

    def test_update(self, client, service):
        service.update_app_assignment.return_value = AppAssignmentResponse(
            client_id="demo-hr", app_name="Demo HR", context_id="c0", context_name="Default"
        )

        response = client.put("/api/oauth/assignments/demo-hr", json={"context_id": "c0"})

        assert response.status_code == 200
        service.update_app_assignment.assert_awaited_once_with("test-user-123", "demo-hr", "c0")

    def test_update_requires_context(self, client, service):
        response = client.put("/api/oauth/assignments/demo-hr", json={})
        assert response.status_code == 400

    def test_connected_apps(self, client, service):
        service.list_connected_apps.return_value = ConnectedAppsResponse(
            connected_apps=[ConnectedApp(client_id="demo-hr", app_name="Demo HR", context_id="c1", context_name="Work")],
            total=1,
        )

        response = client.get("/api/oauth/connected-apps")

        assert response.status_code == 200
        assert response.json()["data"]["connected_apps"][0]["context_name"] == "Work"
        service.list_connected_apps.assert_awaited_once_with("test-user-123")
