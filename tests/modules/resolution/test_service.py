"""Tests for the resolution service facade."""

import pytest
from unittest.mock import MagicMock

from modules.resolution.interfaces import IResolutionService
from modules.resolution.models import NameResolution, ResolutionRequest, ResolutionSource
from modules.resolution.service import ResolutionService
from shared.models import OIDCProperty

from tests.factories import USER_ID


def resolution(name: str, source=ResolutionSource.PREFERRED_FALLBACK) -> NameResolution:
    return NameResolution(name=name, source=source)


@pytest.fixture
def resolver():
    return MagicMock()


@pytest.fixture
def service(resolver):
    return ResolutionService(resolver)


def test_implements_interface(service):
    assert isinstance(service, IResolutionService)


@pytest.mark.asyncio
async def test_resolve_delegates(service, resolver):
    resolver.resolve.return_value = resolution("Jane", ResolutionSource.CONTEXT_SPECIFIC)
    request = ResolutionRequest(context_name="Work")

    result = await service.resolve(USER_ID, request)

    assert result.name == "Jane"
    resolver.resolve.assert_called_once_with(USER_ID, request)


@pytest.mark.asyncio
async def test_resolve_batch_wraps_results(service, resolver):
    resolver.resolve_batch.return_value = {
        "Work": resolution("Jane", ResolutionSource.CONTEXT_SPECIFIC),
        "Gaming": resolution("Janie"),
    }

    result = await service.resolve_batch(USER_ID, ["Work", "Gaming"], OIDCProperty.NICKNAME)

    assert result.total == 2
    assert result.resolutions["Gaming"].name == "Janie"
    resolver.resolve_batch.assert_called_once_with(USER_ID, ["Work", "Gaming"], OIDCProperty.NICKNAME)
