"""
Resolution service implementation.
"""

from typing import Optional, Sequence

from shared.models import OIDCProperty

from .interfaces import IResolutionService
from .models import NameResolution, ResolutionRequest, BatchResolveResponse
from .resolver import NameResolver


class ResolutionService(IResolutionService):
    """Async facade over NameResolver for routes and other modules."""

    def __init__(self, resolver: NameResolver):
        self._resolver = resolver

    async def resolve(self, user_id: str, request: ResolutionRequest) -> NameResolution:
        return self._resolver.resolve(user_id, request)

    async def resolve_many(self, user_id: str, requests: Sequence[ResolutionRequest]) -> list[NameResolution]:
        return self._resolver.resolve_many(user_id, requests)

    async def resolve_batch(
        self,
        user_id: str,
        context_names: Sequence[str],
        oidc_property: Optional[OIDCProperty] = None,
    ) -> BatchResolveResponse:
        resolutions = self._resolver.resolve_batch(user_id, context_names, oidc_property)
        return BatchResolveResponse(resolutions=resolutions, total=len(resolutions))
