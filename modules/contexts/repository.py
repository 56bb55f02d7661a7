"""
Context repository for database access.

Encapsulates Supabase queries and mapping for the `user_contexts` table.
"""

from datetime import datetime, timezone
from typing import Optional, Any, Iterable

from shared.repository import BaseRepository

from .models import Context

CONTEXTS_TABLE = "user_contexts"


class ContextRepository(BaseRepository[Context]):
    """Repository for context data access."""

    def list_contexts(self, user_id: str) -> list[Context]:
        """All of the user's contexts, permanent first, then oldest first."""
        result = self._execute(
            self._db.table(CONTEXTS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("is_permanent", desc=True)
            .order("created_at"),
            "list_contexts",
        )
        return [self._map_to_context(row) for row in result.data]

    def get_context(self, user_id: str, context_id: str) -> Optional[Context]:
        result = self._execute(
            self._db.table(CONTEXTS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("id", context_id),
            "get_context",
        )
        if not result.data:
            return None
        return self._map_to_context(result.data[0])

    def find_contexts_by_ids(self, user_id: str, ids: Iterable[str]) -> list[Context]:
        ids = list(dict.fromkeys(ids))
        if not ids:
            return []
        result = self._execute(
            self._db.table(CONTEXTS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .in_("id", ids),
            "find_contexts_by_ids",
        )
        return [self._map_to_context(row) for row in result.data]

    def find_context_by_name(self, user_id: str, context_name: str) -> Optional[Context]:
        """Exact-match lookup on the user's context names."""
        result = self._execute(
            self._db.table(CONTEXTS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("context_name", context_name)
            .limit(1),
            "find_context_by_name",
        )
        if not result.data:
            return None
        return self._map_to_context(result.data[0])

    def get_permanent_context(self, user_id: str) -> Optional[Context]:
        result = self._execute(
            self._db.table(CONTEXTS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("is_permanent", True)
            .limit(1),
            "get_permanent_context",
        )
        if not result.data:
            return None
        return self._map_to_context(result.data[0])

    def create_context(self, user_id: str, data: dict[str, Any]) -> Context:
        row = {**data, "user_id": user_id, "is_permanent": False}
        result = self._execute(self._db.table(CONTEXTS_TABLE).insert(row), "create_context")
        return self._map_to_context(result.data[0])

    def update_context(self, user_id: str, context_id: str, data: dict[str, Any]) -> Optional[Context]:
        row = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        result = self._execute(
            self._db.table(CONTEXTS_TABLE)
            .update(row)
            .eq("user_id", user_id)
            .eq("id", context_id),
            "update_context",
        )
        if not result.data:
            return None
        return self._map_to_context(result.data[0])

    def delete_context(self, user_id: str, context_id: str) -> bool:
        result = self._execute(
            self._db.table(CONTEXTS_TABLE)
            .delete()
            .eq("user_id", user_id)
            .eq("id", context_id)
            .eq("is_permanent", False),
            "delete_context",
        )
        return bool(result.data)

    def _map_to_context(self, data: dict[str, Any]) -> Context:
        """Map database row to Context model."""
        return Context(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            context_name=data["context_name"],
            description=data.get("description"),
            is_permanent=bool(data.get("is_permanent", False)),
            created_at=data["created_at"],
            updated_at=data.get("updated_at"),
        )
