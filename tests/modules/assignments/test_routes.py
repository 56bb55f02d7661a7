"""
Tests for assignment API endpoints.
"""

import pytest
from unittest.mock import patch, AsyncMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_assignment_service
from modules.assignments.exceptions import (
    AssignmentOwnershipError,
    DuplicateAssignmentTargetError,
    RequiredPropertyRemovalError,
)
from modules.assignments.models import (
    AssignmentOperationResponse,
    BulkAssignmentResponse,
    DeleteAssignmentResponse,
    OIDCBatchResponse,
    OperationKind,
    ReconciliationSummary,
)
from shared.models import OIDCProperty

from tests.conftest import TEST_JWT_SECRET, create_test_token
from tests.factories import make_assignment, make_context, make_name

WORK = make_context("c1", "Work")
JANE = make_name("n1", "Jane")


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def service(app):
    mock_service = AsyncMock()
    app.dependency_overrides[get_assignment_service] = lambda: mock_service
    yield mock_service
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with patch("api.middleware.auth.get_settings") as mock_settings:
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        yield TestClient(app, headers={"Authorization": f"Bearer {create_test_token()}"})


class TestAssignmentRoutes:
    def test_create(self, client, service):
        service.create_assignment.return_value = AssignmentOperationResponse(
            assignment=make_assignment("a1", WORK, JANE),
            operation=OperationKind.CREATED,
        )

        response = client.post("/api/assignments", json={"context_id": "c1", "name_id": "n1"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["operation"] == "CREATED"
        assert data["assignment"]["context_name"] == "Work"

    def test_ownership_error(self, client, service):
        service.create_assignment.side_effect = AssignmentOwnershipError([], ["n-other"])

        response = client.post("/api/assignments", json={"context_id": "c1", "name_id": "n-other"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_OWNERSHIP"

    def test_bulk(self, client, service):
        service.bulk_assign.return_value = BulkAssignmentResponse(
            created=1, updated=0, deleted=1, unchanged=0, failed=0,
            assignments=[make_assignment("a1", WORK, JANE)],
        )

        response = client.post("/api/assignments/bulk", json={"assignments": [
            {"context_id": "c1", "name_id": "n1"},
            {"context_id": "c2", "name_id": None},
        ]})

        assert response.status_code == 200
        assert response.json()["data"]["deleted"] == 1
        entries = service.bulk_assign.await_args[0][1]
        assert entries[1].name_id is None

    def test_bulk_empty_rejected(self, client, service):
        response = client.post("/api/assignments/bulk", json={"assignments": []})
        assert response.status_code == 400
        service.bulk_assign.assert_not_called()

    def test_bulk_duplicates(self, client, service):
        service.bulk_assign.side_effect = DuplicateAssignmentTargetError([("c1", None)])

        response = client.post("/api/assignments/bulk", json={"assignments": [
            {"context_id": "c1", "name_id": "n1"},
            {"context_id": "c1", "name_id": "n2"},
        ]})

        assert response.status_code == 409
        assert response.json()["error"]["details"]["keys"] == ["c1"]

    def test_update_and_delete_by_id(self, client, service):
        service.update_assignment.return_value = make_assignment("a1", WORK, JANE)
        service.delete_assignment.return_value = DeleteAssignmentResponse(deleted=True, assignment_id="a1")

        assert client.put("/api/assignments/a1", json={"name_id": "n1"}).status_code == 200
        assert client.delete("/api/assignments/a1").json()["data"]["deleted"] is True
        service.delete_assignment.assert_awaited_once_with("test-user-123", "a1")


class TestOIDCRoutes:
    def test_oidc_path_is_not_an_assignment_id(self, client, service):
        service.unassign_oidc.return_value = DeleteAssignmentResponse(deleted=True)

        response = client.delete("/api/assignments/oidc?context_id=c1&oidc_property=nickname")

        assert response.status_code == 200
        service.unassign_oidc.assert_awaited_once_with("test-user-123", "c1", OIDCProperty.NICKNAME)
        service.delete_assignment.assert_not_called()

    def test_unknown_property(self, client, service):
        response = client.delete("/api/assignments/oidc?context_id=c1&oidc_property=title")
        assert response.status_code == 400

    def test_required_removal(self, client, service):
        service.unassign_oidc.side_effect = RequiredPropertyRemovalError(["given_name"], "c0")

        response = client.delete("/api/assignments/oidc?context_id=c0&oidc_property=given_name")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "REQUIRED_PROPERTY_REMOVAL"

    def test_assign_requires_property(self, client, service):
        response = client.post("/api/assignments/oidc", json={"context_id": "c1", "name_id": "n1"})
        assert response.status_code == 400

    def test_batch(self, client, service):
        service.batch_oidc.return_value = OIDCBatchResponse(
            context_id="c1",
            context_name="Work",
            assignments=[make_assignment("a1", WORK, JANE, OIDCProperty.GIVEN_NAME)],
            summary=ReconciliationSummary(total_processed=1, created=1),
        )

        response = client.post("/api/assignments/oidc/batch", json={
            "context_id": "c1",
            "assignments": [{"oidc_property": "given_name", "name_id": "n1"}],
        })

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["summary"]["created"] == 1
        assert data["assignments"][0]["oidc_property"] == "given_name"
