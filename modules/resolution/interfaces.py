"""
Resolution module interface.

Used by the API layer for the name preview endpoints and by the OAuth
module to build claims.
"""

from typing import Optional, Protocol, Sequence, runtime_checkable

from shared.models import OIDCProperty

from .models import NameResolution, ResolutionRequest, BatchResolveResponse


@runtime_checkable
class IResolutionService(Protocol):
    """Interface for context-aware name resolution. Never writes."""

    async def resolve(self, user_id: str, request: ResolutionRequest) -> NameResolution:
        """
        Resolve the name to disclose for one request.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        ...

    async def resolve_many(self, user_id: str, requests: Sequence[ResolutionRequest]) -> list[NameResolution]:
        """Resolve several requests with a single fetch of the user's data."""
        ...

    async def resolve_batch(
        self,
        user_id: str,
        context_names: Sequence[str],
        oidc_property: Optional[OIDCProperty] = None,
    ) -> BatchResolveResponse:
        """Resolve a list of context names, keyed by context name."""
        ...
