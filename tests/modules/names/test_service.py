"""Tests for the names service."""

import pytest
from unittest.mock import MagicMock

from modules.names.exceptions import NameNotFoundError, NameDeletionBlockedError
from modules.names.interfaces import INameService
from modules.names.models import (
    CreateNameRequest,
    UpdateNameRequest,
    DeletionReason,
    NameCategory,
)
from modules.names.service import NameService
from shared.models import OIDCProperty

from tests.factories import USER_ID, make_assignment, make_context, make_name


@pytest.fixture
def repo():
    return MagicMock()


@pytest.fixture
def assignments():
    repo = MagicMock()
    repo.find_assignments.return_value = []
    return repo


@pytest.fixture
def service(repo, assignments):
    return NameService(repo, assignments)


class TestInterface:
    def test_implements_interface(self, service):
        assert isinstance(service, INameService)


class TestListNames:
    @pytest.mark.asyncio
    async def test_reports_preferred(self, service, repo):
        repo.list_names.return_value = [
            make_name("n1", "Jane"),
            make_name("n2", "Janie", is_preferred=True),
        ]

        result = await service.list_names(USER_ID)

        assert result.total == 2
        assert result.preferred_name_id == "n2"
        repo.list_names.assert_called_once_with(USER_ID)

    @pytest.mark.asyncio
    async def test_no_preferred(self, service, repo):
        repo.list_names.return_value = [make_name("n1", "Jane")]
        result = await service.list_names(USER_ID)
        assert result.preferred_name_id is None


class TestCreateName:
    @pytest.mark.asyncio
    async def test_create_plain(self, service, repo):
        repo.create_name.return_value = make_name("n1", "Jane")

        request = CreateNameRequest(name_text="  Jane ", category=NameCategory.LEGAL)
        name = await service.create_name(USER_ID, request)

        assert name.id == "n1"
        repo.clear_preferred.assert_not_called()
        repo.create_name.assert_called_once_with(USER_ID, {
            "name_text": "Jane",
            "category": "LEGAL",
            "is_preferred": False,
            "source": "user_created",
        })

    @pytest.mark.asyncio
    async def test_create_preferred_clears_others(self, service, repo):
        repo.create_name.return_value = make_name("n1", "Janie", is_preferred=True)

        request = CreateNameRequest(name_text="Janie", category=NameCategory.PREFERRED, is_preferred=True)
        await service.create_name(USER_ID, request)

        repo.clear_preferred.assert_called_once_with(USER_ID)

    @pytest.mark.asyncio
    async def test_oidc_category_is_stored_as_value(self, service, repo):
        repo.create_name.return_value = make_name("n1", "Jane")

        request = CreateNameRequest(name_text="Jane", category=OIDCProperty.GIVEN_NAME)
        await service.create_name(USER_ID, request)

        assert repo.create_name.call_args[0][1]["category"] == "given_name"


class TestUpdateName:
    @pytest.mark.asyncio
    async def test_missing_name(self, service, repo):
        repo.get_name.return_value = None
        with pytest.raises(NameNotFoundError):
            await service.update_name(USER_ID, "n1", UpdateNameRequest(name_text="X"))
        repo.update_name.assert_not_called()

    @pytest.mark.asyncio
    async def test_mark_preferred_spares_self(self, service, repo):
        repo.get_name.return_value = make_name("n1", "Jane")
        repo.update_name.return_value = make_name("n1", "Jane", is_preferred=True)

        result = await service.update_name(USER_ID, "n1", UpdateNameRequest(is_preferred=True))

        assert result.is_preferred is True
        repo.clear_preferred.assert_called_once_with(USER_ID, except_name_id="n1")
        repo.update_name.assert_called_once_with(USER_ID, "n1", {"is_preferred": True})

    @pytest.mark.asyncio
    async def test_rename_leaves_preferred_alone(self, service, repo):
        repo.get_name.return_value = make_name("n1", "Jane")
        repo.update_name.return_value = make_name("n1", "Jayne")

        await service.update_name(USER_ID, "n1", UpdateNameRequest(name_text="Jayne"))

        repo.clear_preferred.assert_not_called()

    def test_update_requires_a_field(self):
        with pytest.raises(ValueError):
            UpdateNameRequest()


class TestCheckDeletion:
    @pytest.mark.asyncio
    async def test_last_name_is_protected(self, service, repo):
        repo.get_name.return_value = make_name("n1", "Jane")
        repo.count_names.return_value = 1

        check = await service.check_deletion(USER_ID, "n1")

        assert check.can_delete is False
        assert check.reason_code is DeletionReason.LAST_NAME_PROTECTION

    @pytest.mark.asyncio
    async def test_permanent_context_assignment(self, service, repo, assignments):
        name = make_name("n1", "Jane")
        default = make_context("c0", "Default", is_permanent=True)
        repo.get_name.return_value = name
        repo.count_names.return_value = 3
        assignments.find_assignments.return_value = [
            make_assignment("a1", default, name, OIDCProperty.GIVEN_NAME),
        ]

        check = await service.check_deletion(USER_ID, "n1")

        assert check.reason_code is DeletionReason.PERMANENT_CONTEXT_ASSIGNED
        assert check.assignment_count == 1
        assignments.find_assignments.assert_called_once_with(USER_ID, name_id="n1")

    @pytest.mark.asyncio
    async def test_other_context_assignment(self, service, repo, assignments):
        name = make_name("n1", "Jane")
        repo.get_name.return_value = name
        repo.count_names.return_value = 2
        assignments.find_assignments.return_value = [
            make_assignment("a1", make_context("c1", "Work"), name),
            make_assignment("a2", make_context("c2", "Gaming"), name),
        ]

        check = await service.check_deletion(USER_ID, "n1")

        assert check.reason_code is DeletionReason.CONTEXT_ASSIGNED
        assert check.assignment_count == 2

    @pytest.mark.asyncio
    async def test_allowed(self, service, repo):
        repo.get_name.return_value = make_name("n1", "Jane")
        repo.count_names.return_value = 2

        check = await service.check_deletion(USER_ID, "n1")

        assert check.can_delete is True
        assert check.reason_code is DeletionReason.DELETION_ALLOWED

    @pytest.mark.asyncio
    async def test_unknown_name(self, service, repo):
        repo.get_name.return_value = None
        with pytest.raises(NameNotFoundError):
            await service.check_deletion(USER_ID, "missing")


class TestDeleteName:
    @pytest.mark.asyncio
    async def test_blocked(self, service, repo):
        repo.get_name.return_value = make_name("n1", "Jane")
        repo.count_names.return_value = 1

        with pytest.raises(NameDeletionBlockedError) as exc_info:
            await service.delete_name(USER_ID, "n1")

        assert exc_info.value.details["reason_code"] == "LAST_NAME_PROTECTION"
        repo.delete_name.assert_not_called()

    @pytest.mark.asyncio
    async def test_deleted(self, service, repo):
        repo.get_name.return_value = make_name("n1", "Jane")
        repo.count_names.return_value = 2
        repo.delete_name.return_value = True

        assert await service.delete_name(USER_ID, "n1") is True
        repo.delete_name.assert_called_once_with(USER_ID, "n1")

    @pytest.mark.asyncio
    async def test_vanished_between_check_and_delete(self, service, repo):
        repo.get_name.return_value = make_name("n1", "Jane")
        repo.count_names.return_value = 2
        repo.delete_name.return_value = False

        with pytest.raises(NameNotFoundError):
            await service.delete_name(USER_ID, "n1")


class TestNameAssignments:
    @pytest.mark.asyncio
    async def test_lists_bindings(self, service, repo, assignments):
        name = make_name("n1", "Jane")
        default_context = make_context("c0", "Default", is_permanent=True)
        repo.get_name.return_value = name
        assignments.find_assignments.return_value = [
            make_assignment("a1", make_context("c1", "Work"), name),
            make_assignment("a2", default_context, name, OIDCProperty.GIVEN_NAME),
        ]

        result = await service.list_name_assignments(USER_ID, "n1")

        assert result.name_text == "Jane"
        assert result.total == 2
        assert [(a.context_name, a.oidc_property) for a in result.assignments] == [
            ("Work", None),
            ("Default", OIDCProperty.GIVEN_NAME),
        ]
        assert result.assignments[1].is_permanent is True
        assignments.find_assignments.assert_called_once_with(USER_ID, name_id="n1")

    @pytest.mark.asyncio
    async def test_unknown_name(self, service, repo, assignments):
        repo.get_name.return_value = None

        with pytest.raises(NameNotFoundError):
            await service.list_name_assignments(USER_ID, "n-other")
        assignments.find_assignments.assert_not_called()
