"""
Tests for context API endpoints.
"""

import pytest
from unittest.mock import patch, AsyncMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_context_service
from modules.contexts.exceptions import (
    ContextNameTakenError,
    PermanentContextError,
    ContextHasAssignmentsError,
)
from modules.contexts.models import (
    ContextCompleteness,
    ContextListResponse,
    ContextWithStats,
    DeleteContextResponse,
)

from tests.conftest import TEST_JWT_SECRET, create_test_token
from tests.factories import make_context


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def service(app):
    mock_service = AsyncMock()
    app.dependency_overrides[get_context_service] = lambda: mock_service
    yield mock_service
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with patch("api.middleware.auth.get_settings") as mock_settings:
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        yield TestClient(app, headers={"Authorization": f"Bearer {create_test_token()}"})


class TestContextRoutes:
    def test_list(self, client, service):
        context = make_context("c0", "Default", is_permanent=True)
        service.list_contexts.return_value = ContextListResponse(
            contexts=[ContextWithStats(**context.model_dump(), assignment_count=3)],
            total=1,
        )

        response = client.get("/api/contexts")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["contexts"][0]["is_permanent"] is True
        assert data["contexts"][0]["assignment_count"] == 3

    def test_create(self, client, service):
        service.create_context.return_value = make_context("c1", "Work")

        response = client.post("/api/contexts", json={"context_name": "Work"})

        assert response.status_code == 201
        assert response.json()["data"]["context_name"] == "Work"

    def test_create_invalid_name(self, client, service):
        response = client.post("/api/contexts", json={"context_name": "Work<script>"})
        assert response.status_code == 400
        service.create_context.assert_not_called()

    def test_create_taken(self, client, service):
        service.create_context.side_effect = ContextNameTakenError("Work")

        response = client.post("/api/contexts", json={"context_name": "Work"})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONTEXT_NAME_TAKEN"

    def test_rename_permanent(self, client, service):
        service.update_context.side_effect = PermanentContextError("c0", "renamed")

        response = client.put("/api/contexts/c0", json={"context_name": "Other"})

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "PERMANENT_CONTEXT"

    def test_delete_requires_force(self, client, service):
        service.delete_context.side_effect = ContextHasAssignmentsError("c1", 2)

        response = client.delete("/api/contexts/c1")

        assert response.status_code == 409
        service.delete_context.assert_awaited_once_with("test-user-123", "c1", False)

    def test_delete_with_force(self, client, service):
        service.delete_context.return_value = DeleteContextResponse(
            deleted=True, context_id="c1", removed_assignments=2
        )

        response = client.delete("/api/contexts/c1?force=true")

        assert response.status_code == 200
        assert response.json()["data"]["removed_assignments"] == 2
        service.delete_context.assert_awaited_once_with("test-user-123", "c1", True)

    def test_unauthenticated(self, app, service):
        assert TestClient(app).get("/api/contexts").status_code == 401

    def test_completeness(self, client, service):
        service.check_completeness.return_value = ContextCompleteness(
            context_id="c1",
            context_name="Work",
            is_complete=False,
            required_properties=["family_name", "given_name", "name"],
            assigned_properties=["name"],
            missing_properties=["family_name", "given_name"],
            assignment_count=1,
            completion_percentage=33.33,
        )

        response = client.get("/api/contexts/c1/completeness")

        assert response.status_code == 200
        assert response.json()["data"]["missing_properties"] == ["family_name", "given_name"]
        service.check_completeness.assert_awaited_once_with("test-user-123", "c1")
