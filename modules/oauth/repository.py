"""
OAuth repository for database access.

Covers the `oauth_sessions`, `oauth_client_registry` and
`app_context_assignments` tables.
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Optional, Any

from shared.repository import BaseRepository

from .models import OAuthClient, OAuthSession, AppContextAssignment

SESSIONS_TABLE = "oauth_sessions"
CLIENTS_TABLE = "oauth_client_registry"
APP_ASSIGNMENTS_TABLE = "app_context_assignments"


class OAuthRepository(BaseRepository[OAuthSession]):
    """Repository for OAuth sessions, clients and app context choices."""

    def get_active_session(self, session_token: str) -> Optional[OAuthSession]:
        """Load a session by token, only if it has not expired."""
        now = datetime.now(timezone.utc).isoformat()
        result = self._execute(
            self._db.table(SESSIONS_TABLE)
            .select("*")
            .eq("session_token", session_token)
            .gt("expires_at", now)
            .limit(1),
            "get_active_session",
        )
        if not result.data:
            return None
        return self._map_to_session(result.data[0])

    def mark_session_used(self, session_token: str) -> None:
        self._execute(
            self._db.table(SESSIONS_TABLE)
            .update({"used_at": datetime.now(timezone.utc).isoformat()})
            .eq("session_token", session_token),
            "mark_session_used",
        )

    def get_client(self, client_id: str) -> Optional[OAuthClient]:
        result = self._execute(
            self._db.table(CLIENTS_TABLE)
            .select("client_id, app_name, display_name")
            .eq("client_id", client_id)
            .limit(1),
            "get_client",
        )
        if not result.data:
            return None
        return self._map_to_client(result.data[0])

    def find_clients(self, client_ids: list[str]) -> list[OAuthClient]:
        if not client_ids:
            return []
        result = self._execute(
            self._db.table(CLIENTS_TABLE)
            .select("client_id, app_name, display_name")
            .in_("client_id", list(dict.fromkeys(client_ids))),
            "find_clients",
        )
        return [self._map_to_client(row) for row in result.data or []]

    def get_app_assignment(self, profile_id: str, client_id: str) -> Optional[AppContextAssignment]:
        result = self._execute(
            self._db.table(APP_ASSIGNMENTS_TABLE)
            .select("*")
            .eq("profile_id", profile_id)
            .eq("client_id", client_id)
            .limit(1),
            "get_app_assignment",
        )
        if not result.data:
            return None
        return self._map_to_app_assignment(result.data[0])

    def list_app_assignments(self, profile_id: str) -> list[AppContextAssignment]:
        result = self._execute(
            self._db.table(APP_ASSIGNMENTS_TABLE)
            .select("*")
            .eq("profile_id", profile_id)
            .order("updated_at", desc=True),
            "list_app_assignments",
        )
        return [self._map_to_app_assignment(row) for row in result.data or []]

    def count_active_sessions(self, profile_id: str) -> dict[str, int]:
        """Non-expired session counts for the user, keyed by client_id."""
        now = datetime.now(timezone.utc).isoformat()
        result = self._execute(
            self._db.table(SESSIONS_TABLE)
            .select("client_id")
            .eq("profile_id", profile_id)
            .gt("expires_at", now),
            "count_active_sessions",
        )
        return dict(Counter(row["client_id"] for row in result.data or []))

    def upsert_app_assignment(self, profile_id: str, client_id: str, context_id: str) -> AppContextAssignment:
        row = {
            "profile_id": profile_id,
            "client_id": client_id,
            "context_id": context_id,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        result = self._execute(
            self._db.table(APP_ASSIGNMENTS_TABLE).upsert(row, on_conflict="profile_id,client_id"),
            "upsert_app_assignment",
        )
        return self._map_to_app_assignment(result.data[0])

    def _map_to_client(self, data: dict[str, Any]) -> OAuthClient:
        return OAuthClient(
            client_id=data["client_id"],
            app_name=data["app_name"],
            display_name=data.get("display_name"),
        )

    def _map_to_session(self, data: dict[str, Any]) -> OAuthSession:
        return OAuthSession(
            session_token=data["session_token"],
            profile_id=str(data["profile_id"]),
            client_id=data["client_id"],
            expires_at=data["expires_at"],
            used_at=data.get("used_at"),
        )

    def _map_to_app_assignment(self, data: dict[str, Any]) -> AppContextAssignment:
        return AppContextAssignment(
            profile_id=str(data["profile_id"]),
            client_id=data["client_id"],
            context_id=str(data["context_id"]),
            updated_at=data.get("updated_at"),
        )
