"""
Context-aware name resolution.

The precedence chain, first match wins:

1. An assignment in the requested context (narrowed to the requested OIDC
   property when one is given) -> context_specific
2. Any assignment for the requested OIDC property, in any context
   -> oidc_property
3. The user's preferred name -> preferred_fallback
4. The configured literal -> error_fallback

The decision functions are pure. NameResolver does the fetching through a
ResolutionStore and never writes.
"""

import logging
from typing import Iterable, Mapping, Optional, Protocol, Sequence, runtime_checkable

from shared.models import OIDCProperty

from modules.assignments.models import Assignment
from modules.contexts.models import Context
from modules.names.models import Name

from .exceptions import UserNotFoundError
from .models import NameResolution, ResolutionMetadata, ResolutionRequest, ResolutionSource

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_NAME = "Unknown User"

# Order in which property bindings stand in for a context's generic binding
PROPERTY_PRIORITY: tuple[OIDCProperty, ...] = (
    OIDCProperty.NAME,
    OIDCProperty.DISPLAY_NAME,
    OIDCProperty.PREFERRED_USERNAME,
    OIDCProperty.GIVEN_NAME,
    OIDCProperty.NICKNAME,
    OIDCProperty.FAMILY_NAME,
    OIDCProperty.MIDDLE_NAME,
)


@runtime_checkable
class ResolutionStore(Protocol):
    """Store operations the resolver and reconciler depend on."""

    def find_assignments(
        self,
        user_id: str,
        context_id: Optional[str] = None,
        oidc_property: Optional[OIDCProperty] = None,
        context_ids: Optional[Iterable[str]] = None,
    ) -> list[Assignment]: ...

    def find_preferred_names(self, user_id: str) -> list[Name]: ...

    def find_names_by_ids(self, user_id: str, ids: Iterable[str]) -> list[Name]: ...

    def find_contexts_by_ids(self, user_id: str, ids: Iterable[str]) -> list[Context]: ...

    def find_context_by_name(self, user_id: str, context_name: str) -> Optional[Context]: ...

    def user_exists(self, user_id: str) -> bool: ...

    def upsert_assignment(
        self,
        user_id: str,
        context_id: str,
        name_id: str,
        oidc_property: Optional[OIDCProperty] = None,
    ) -> Assignment: ...

    def delete_assignment(
        self,
        user_id: str,
        context_id: str,
        oidc_property: Optional[OIDCProperty] = None,
    ) -> bool: ...


# -----------------------------------------------------------------------------
# Pure decision functions
# -----------------------------------------------------------------------------


def normalize_context_name(context_name: Optional[str]) -> Optional[str]:
    """Blank or whitespace-only context names count as absent."""
    if context_name is None:
        return None
    return context_name.strip() or None


def _property_rank(prop: Optional[OIDCProperty]) -> int:
    if prop is None:
        return 0
    return PROPERTY_PRIORITY.index(prop) + 1


def _age_key(assignment: Assignment):
    return (assignment.created_at, assignment.id)


def pick_context_assignment(
    assignments: Iterable[Assignment],
    context_name: str,
    oidc_property: Optional[OIDCProperty],
    visible_names: Mapping[str, Name],
) -> Optional[Assignment]:
    """Step 1: the binding in `context_name`, if any is disclosable."""
    candidates = [
        a for a in assignments
        if a.context_name == context_name and a.name_id in visible_names
    ]
    if oidc_property is not None:
        candidates = [a for a in candidates if a.oidc_property == oidc_property]
        return min(candidates, key=_age_key, default=None)
    return min(candidates, key=lambda a: (_property_rank(a.oidc_property), *_age_key(a)), default=None)


def pick_property_assignment(
    assignments: Iterable[Assignment],
    oidc_property: OIDCProperty,
    visible_names: Mapping[str, Name],
) -> Optional[Assignment]:
    """Step 2: any binding of `oidc_property`; the permanent context wins ties."""
    candidates = [
        a for a in assignments
        if a.oidc_property == oidc_property and a.name_id in visible_names
    ]
    return min(candidates, key=lambda a: (not a.context_is_permanent, *_age_key(a)), default=None)


def pick_preferred(preferred: Iterable[Name]) -> Optional[Name]:
    """Step 3: more than one preferred name only happens on corrupt data."""
    return min(preferred, key=lambda n: (n.created_at, n.id), default=None)


def decide(
    request: ResolutionRequest,
    assignments: Sequence[Assignment],
    visible_names: Mapping[str, Name],
    preferred: Sequence[Name],
    fallback_name: str = DEFAULT_FALLBACK_NAME,
) -> NameResolution:
    """Apply the precedence chain to already-fetched data."""
    context_name = normalize_context_name(request.context_name)
    prop = request.oidc_property
    meta = {"requested_context": context_name, "requested_property": prop}

    if context_name is not None:
        hit = pick_context_assignment(assignments, context_name, prop, visible_names)
        if hit is not None:
            return _from_assignment(hit, ResolutionSource.CONTEXT_SPECIFIC, visible_names, meta)

    if prop is not None:
        hit = pick_property_assignment(assignments, prop, visible_names)
        if hit is not None:
            return _from_assignment(hit, ResolutionSource.OIDC_PROPERTY, visible_names, meta)

    name = pick_preferred(preferred)
    if name is not None:
        return NameResolution(
            name=name.name_text,
            source=ResolutionSource.PREFERRED_FALLBACK,
            metadata=ResolutionMetadata(**meta, name_id=name.id, fallback_reason="no_assignment"),
        )

    return NameResolution(
        name=fallback_name,
        source=ResolutionSource.ERROR_FALLBACK,
        metadata=ResolutionMetadata(**meta, fallback_reason="no_preferred_name"),
    )


def _from_assignment(
    assignment: Assignment,
    source: ResolutionSource,
    visible_names: Mapping[str, Name],
    meta: dict,
) -> NameResolution:
    return NameResolution(
        name=visible_names[assignment.name_id].name_text,
        source=source,
        metadata=ResolutionMetadata(
            **meta,
            context_id=assignment.context_id,
            assignment_id=assignment.id,
            name_id=assignment.name_id,
            oidc_property=assignment.oidc_property,
        ),
    )


# -----------------------------------------------------------------------------
# Resolver
# -----------------------------------------------------------------------------


class NameResolver:
    """
    Fetches a user's assignments and names, then applies decide().

    Every call costs a fixed number of store queries: the user check, one
    assignment fetch, one name fetch and one preferred-name fetch,
    regardless of how many requests are resolved.
    """

    def __init__(self, store: ResolutionStore, fallback_name: str = DEFAULT_FALLBACK_NAME):
        self._store = store
        self._fallback_name = fallback_name

    def resolve(self, user_id: str, request: ResolutionRequest) -> NameResolution:
        return self.resolve_many(user_id, [request])[0]

    def resolve_many(self, user_id: str, requests: Sequence[ResolutionRequest]) -> list[NameResolution]:
        """
        Resolve several requests against one snapshot of the user's data.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        if not self._store.user_exists(user_id):
            raise UserNotFoundError(user_id)

        assignments = self._store.find_assignments(user_id)
        names = self._store.find_names_by_ids(user_id, [a.name_id for a in assignments])
        visible = {n.id: n for n in names}
        preferred = self._store.find_preferred_names(user_id)

        skipped = [a.id for a in assignments if a.name_id not in visible]
        if skipped:
            logger.warning(f"Skipping {len(skipped)} assignment(s) with missing names for user {user_id}")

        results = [
            decide(request, assignments, visible, preferred, self._fallback_name)
            for request in requests
        ]
        for request, result in zip(requests, results):
            logger.debug(
                f"Resolved {request.context_name!r}/{request.oidc_property} for user {user_id} "
                f"via {result.source.value}"
            )
        return results

    def resolve_batch(
        self,
        user_id: str,
        context_names: Sequence[str],
        oidc_property: Optional[OIDCProperty] = None,
    ) -> dict[str, NameResolution]:
        """Resolve each distinct context name, keyed by the name as given."""
        unique_names = list(dict.fromkeys(context_names))
        requests = [ResolutionRequest(context_name=c, oidc_property=oidc_property) for c in unique_names]
        results = self.resolve_many(user_id, requests)
        return dict(zip(unique_names, results))
