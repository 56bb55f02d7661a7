"""
Assignment repository for database access.

Encapsulates Supabase queries for the `context_name_assignments` table.
Rows are selected with their context and name joined so that callers
can resolve names and report context labels without extra round trips.
"""

from datetime import datetime, timezone
from typing import Optional, Any, Iterable

from shared.models import OIDCProperty
from shared.repository import BaseRepository

from .models import Assignment

ASSIGNMENTS_TABLE = "context_name_assignments"
ASSIGNMENT_SELECT = "*, user_contexts(context_name, is_permanent), names(name_text)"


class AssignmentRepository(BaseRepository[Assignment]):
    """
    Repository for context-name assignments.

    Note: This repository does NOT check that the context and name belong
    to the user. The service layer verifies ownership before any write.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_assignments(
        self,
        user_id: str,
        context_id: Optional[str] = None,
        oidc_property: Optional[OIDCProperty] = None,
        context_ids: Optional[Iterable[str]] = None,
        name_id: Optional[str] = None,
        generic_only: bool = False,
    ) -> list[Assignment]:
        """
        Fetch the user's assignments, oldest first.

        Args:
            user_id: Owning user
            context_id: Restrict to one context
            oidc_property: Restrict to one OIDC property
            context_ids: Restrict to a set of contexts
            name_id: Restrict to assignments of one name
            generic_only: Restrict to rows with no OIDC property
        """
        query = (
            self._db.table(ASSIGNMENTS_TABLE)
            .select(ASSIGNMENT_SELECT)
            .eq("user_id", user_id)
        )
        if context_id is not None:
            query = query.eq("context_id", context_id)
        if oidc_property is not None:
            query = query.eq("oidc_property", OIDCProperty(oidc_property).value)
        elif generic_only:
            query = query.is_("oidc_property", "null")
        if context_ids is not None:
            ids = list(dict.fromkeys(context_ids))
            if not ids:
                return []
            query = query.in_("context_id", ids)
        if name_id is not None:
            query = query.eq("name_id", name_id)

        result = self._execute(query.order("created_at").order("id"), "find_assignments")
        return [self._map_to_assignment(row) for row in result.data]

    def get_assignment(self, user_id: str, assignment_id: str) -> Optional[Assignment]:
        result = self._execute(
            self._db.table(ASSIGNMENTS_TABLE)
            .select(ASSIGNMENT_SELECT)
            .eq("user_id", user_id)
            .eq("id", assignment_id),
            "get_assignment",
        )
        if not result.data:
            return None
        return self._map_to_assignment(result.data[0])

    def count_assignments(self, user_id: str, name_id: Optional[str] = None, context_id: Optional[str] = None) -> int:
        query = (
            self._db.table(ASSIGNMENTS_TABLE)
            .select("id", count="exact")
            .eq("user_id", user_id)
        )
        if name_id is not None:
            query = query.eq("name_id", name_id)
        if context_id is not None:
            query = query.eq("context_id", context_id)
        result = self._execute(query, "count_assignments")
        return result.count or 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def upsert_assignment(
        self,
        user_id: str,
        context_id: str,
        name_id: str,
        oidc_property: Optional[OIDCProperty] = None,
    ) -> Assignment:
        """
        Bind a name to (context_id, oidc_property), replacing any existing binding.

        The row is written, then re-read with its joins.
        """
        existing = self.find_assignments(
            user_id,
            context_id=context_id,
            oidc_property=oidc_property,
            generic_only=oidc_property is None,
        )
        now = datetime.now(timezone.utc).isoformat()

        if existing:
            result = self._execute(
                self._db.table(ASSIGNMENTS_TABLE)
                .update({"name_id": name_id, "updated_at": now})
                .eq("user_id", user_id)
                .eq("id", existing[0].id),
                "upsert_assignment",
            )
        else:
            row = {
                "user_id": user_id,
                "context_id": context_id,
                "name_id": name_id,
                "oidc_property": OIDCProperty(oidc_property).value if oidc_property else None,
            }
            result = self._execute(
                self._db.table(ASSIGNMENTS_TABLE).insert(row),
                "upsert_assignment",
            )

        assignment_id = str(result.data[0]["id"])
        stored = self.get_assignment(user_id, assignment_id)
        return stored if stored is not None else self._map_to_assignment(result.data[0])

    def update_assignment(self, user_id: str, assignment_id: str, data: dict[str, Any]) -> Optional[Assignment]:
        row = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        result = self._execute(
            self._db.table(ASSIGNMENTS_TABLE)
            .update(row)
            .eq("user_id", user_id)
            .eq("id", assignment_id),
            "update_assignment",
        )
        if not result.data:
            return None
        return self.get_assignment(user_id, assignment_id)

    def delete_assignment(
        self,
        user_id: str,
        context_id: str,
        oidc_property: Optional[OIDCProperty] = None,
    ) -> bool:
        """Remove the binding at (context_id, oidc_property). Returns False if none existed."""
        query = (
            self._db.table(ASSIGNMENTS_TABLE)
            .delete()
            .eq("user_id", user_id)
            .eq("context_id", context_id)
        )
        if oidc_property is None:
            query = query.is_("oidc_property", "null")
        else:
            query = query.eq("oidc_property", OIDCProperty(oidc_property).value)
        result = self._execute(query, "delete_assignment")
        return bool(result.data)

    def delete_assignment_by_id(self, user_id: str, assignment_id: str) -> bool:
        result = self._execute(
            self._db.table(ASSIGNMENTS_TABLE)
            .delete()
            .eq("user_id", user_id)
            .eq("id", assignment_id),
            "delete_assignment_by_id",
        )
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _map_to_assignment(self, data: dict[str, Any]) -> Assignment:
        """Map database row (with optional joins) to Assignment model."""
        context = data.get("user_contexts") or {}
        name = data.get("names") or {}
        prop = data.get("oidc_property")
        return Assignment(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            context_id=str(data["context_id"]),
            name_id=str(data["name_id"]),
            oidc_property=OIDCProperty(prop) if prop else None,
            created_at=data["created_at"],
            updated_at=data.get("updated_at"),
            context_name=context.get("context_name"),
            context_is_permanent=bool(context.get("is_permanent", False)),
            name_text=name.get("name_text"),
        )
