"""
OAuth service implementation.

Turns an opaque session token into OIDC claims:
session -> client -> the user's chosen context for that client -> one
resolve_many() call covering every OIDC property.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, TYPE_CHECKING

from shared.config import get_settings
from shared.exceptions import DatabaseError
from shared.models import OIDCProperty

from modules.contexts.exceptions import ContextNotFoundError
from modules.resolution.models import ASSIGNED_SOURCES, NameResolution, ResolutionRequest, ResolutionSource

from .interfaces import IOAuthService
from .models import (
    OAuthResolveResponse,
    AppAssignmentResponse,
    OAuthClient,
    ConnectedApp,
    ConnectedAppsResponse,
)
from .exceptions import InvalidSessionTokenError, ClientNotRegisteredError, NoContextAssignedError
from .repository import OAuthRepository

if TYPE_CHECKING:
    from modules.contexts.repository import ContextRepository
    from modules.resolution.interfaces import IResolutionService

logger = logging.getLogger(__name__)


def choose_name_claim(for_name: NameResolution, generic: NameResolution) -> NameResolution:
    """
    Pick the resolution behind the `name` claim.

    A `name` binding in the context wins, then the context's generic
    binding, then whatever the full chain produced for `name`.
    """
    if for_name.source is ResolutionSource.CONTEXT_SPECIFIC:
        return for_name
    if generic.source is ResolutionSource.CONTEXT_SPECIFIC:
        return generic
    return for_name


class OAuthService(IOAuthService):
    """OAuth service backed by Supabase and the resolution service."""

    def __init__(
        self,
        repository: OAuthRepository,
        contexts: "ContextRepository",
        resolution: "IResolutionService",
    ):
        self._repo = repository
        self._contexts = contexts
        self._resolution = resolution

    async def resolve_session(self, session_token: str) -> OAuthResolveResponse:
        session = self._repo.get_active_session(session_token)
        if session is None:
            raise InvalidSessionTokenError()

        client = self._require_client(session.client_id)
        user_id = session.profile_id

        app_assignment = self._repo.get_app_assignment(user_id, client.client_id)
        if app_assignment is None:
            raise NoContextAssignedError(client.client_id)
        contexts = self._contexts.find_contexts_by_ids(user_id, [app_assignment.context_id])
        if not contexts:
            raise NoContextAssignedError(client.client_id)
        context = contexts[0]

        properties = list(OIDCProperty)
        requests = [ResolutionRequest(context_name=context.context_name, oidc_property=p) for p in properties]
        requests.append(ResolutionRequest(context_name=context.context_name))
        results = await self._resolution.resolve_many(user_id, requests)
        by_property = dict(zip(properties, results))
        name_result = choose_name_claim(by_property[OIDCProperty.NAME], results[-1])

        now = datetime.now(timezone.utc)
        claims = self._base_claims(user_id, client, context.context_name, now)
        for prop, result in by_property.items():
            if result.source in ASSIGNED_SOURCES:
                claims[prop.value] = result.name
        claims[OIDCProperty.NAME.value] = name_result.name

        try:
            self._repo.mark_session_used(session_token)
        except DatabaseError as e:
            logger.warning(f"Could not mark session used for client {client.client_id}: {e.message}")

        logger.info(
            f"Resolved claims for user {user_id} on {client.app_name} "
            f"(context {context.context_name}, source {name_result.source.value})"
        )
        return OAuthResolveResponse(
            name=name_result.name,
            source=name_result.source,
            claims=claims,
            resolved_at=now.isoformat(),
        )

    async def get_app_assignment(self, user_id: str, client_id: str) -> AppAssignmentResponse:
        client = self._require_client(client_id)
        assignment = self._repo.get_app_assignment(user_id, client_id)
        context_name = None
        if assignment is not None:
            contexts = self._contexts.find_contexts_by_ids(user_id, [assignment.context_id])
            context_name = contexts[0].context_name if contexts else None
        return AppAssignmentResponse(
            client_id=client.client_id,
            app_name=client.app_name,
            display_name=client.display_name,
            context_id=assignment.context_id if assignment else None,
            context_name=context_name,
        )

    async def update_app_assignment(self, user_id: str, client_id: str, context_id: str) -> AppAssignmentResponse:
        client = self._require_client(client_id)
        context = self._contexts.get_context(user_id, context_id)
        if context is None:
            raise ContextNotFoundError(context_id)

        self._repo.upsert_app_assignment(user_id, client_id, context_id)
        logger.info(f"User {user_id} now presents context {context.context_name} to {client.app_name}")
        return AppAssignmentResponse(
            client_id=client.client_id,
            app_name=client.app_name,
            display_name=client.display_name,
            context_id=context.id,
            context_name=context.context_name,
        )

    async def list_connected_apps(self, user_id: str) -> ConnectedAppsResponse:
        app_assignments = self._repo.list_app_assignments(user_id)
        if not app_assignments:
            return ConnectedAppsResponse(connected_apps=[], total=0)

        clients = {c.client_id: c for c in self._repo.find_clients([a.client_id for a in app_assignments])}
        contexts = {
            c.id: c
            for c in self._contexts.find_contexts_by_ids(user_id, [a.context_id for a in app_assignments])
        }
        sessions = self._repo.count_active_sessions(user_id)

        apps = []
        for assignment in app_assignments:
            client = clients.get(assignment.client_id)
            if client is None:
                logger.debug(f"Skipping unregistered client {assignment.client_id} for user {user_id}")
                continue
            context = contexts.get(assignment.context_id)
            apps.append(ConnectedApp(
                client_id=client.client_id,
                app_name=client.app_name,
                display_name=client.display_name,
                context_id=assignment.context_id,
                context_name=context.context_name if context else None,
                active_sessions=sessions.get(client.client_id, 0),
                updated_at=assignment.updated_at,
            ))
        return ConnectedAppsResponse(connected_apps=apps, total=len(apps))

    def _require_client(self, client_id: str) -> OAuthClient:
        client = self._repo.get_client(client_id)
        if client is None:
            raise ClientNotRegisteredError(client_id)
        return client

    def _base_claims(self, user_id: str, client: OAuthClient, context_name: str, now: datetime) -> dict[str, Any]:
        settings = get_settings()
        issued_at = int(now.timestamp())
        return {
            "sub": user_id,
            "iss": settings.oauth_issuer,
            "aud": client.app_name,
            "iat": issued_at,
            "exp": issued_at + settings.oauth_claims_ttl_seconds,
            "nbf": issued_at,
            "jti": f"tnp_{uuid.uuid4().hex}",
            "context_name": context_name,
            "client_id": client.client_id,
            "app_name": client.app_name,
        }
