"""
Name repository for database access.

Encapsulates Supabase queries and mapping for the `names` table.
"""

from datetime import datetime, timezone
from typing import Optional, Any, Iterable

from shared.models import OIDCProperty
from shared.repository import BaseRepository

from .models import Name, NameCategory

NAMES_TABLE = "names"


def _parse_category(value: Optional[str]):
    if value is None:
        return NameCategory.NICKNAME
    try:
        return NameCategory(value)
    except ValueError:
        return OIDCProperty(value)


class NameRepository(BaseRepository[Name]):
    """
    Repository for name data access.

    Note: This repository does NOT perform policy checks (last-name or
    assignment protection). The service layer is responsible for those.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_names(self, user_id: str) -> list[Name]:
        """All names owned by the user, oldest first."""
        result = self._execute(
            self._db.table(NAMES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at"),
            "list_names",
        )
        return [self._map_to_name(row) for row in result.data]

    def get_name(self, user_id: str, name_id: str) -> Optional[Name]:
        result = self._execute(
            self._db.table(NAMES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("id", name_id),
            "get_name",
        )
        if not result.data:
            return None
        return self._map_to_name(result.data[0])

    def find_names_by_ids(self, user_id: str, ids: Iterable[str]) -> list[Name]:
        """
        Fetch the user's names among the given ids.

        Ids that do not exist or belong to another user are simply absent
        from the result.
        """
        ids = list(dict.fromkeys(ids))
        if not ids:
            return []
        result = self._execute(
            self._db.table(NAMES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .in_("id", ids),
            "find_names_by_ids",
        )
        return [self._map_to_name(row) for row in result.data]

    def find_preferred_names(self, user_id: str) -> list[Name]:
        """
        Fetch the user's preferred names.

        Normally zero or one row; more than one only on corrupt data.
        """
        result = self._execute(
            self._db.table(NAMES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("is_preferred", True)
            .order("created_at")
            .order("id"),
            "find_preferred_names",
        )
        return [self._map_to_name(row) for row in result.data]

    def count_names(self, user_id: str) -> int:
        result = self._execute(
            self._db.table(NAMES_TABLE)
            .select("id", count="exact")
            .eq("user_id", user_id),
            "count_names",
        )
        return result.count or 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_name(self, user_id: str, data: dict[str, Any]) -> Name:
        row = {**data, "user_id": user_id}
        result = self._execute(self._db.table(NAMES_TABLE).insert(row), "create_name")
        return self._map_to_name(result.data[0])

    def update_name(self, user_id: str, name_id: str, data: dict[str, Any]) -> Optional[Name]:
        row = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        result = self._execute(
            self._db.table(NAMES_TABLE)
            .update(row)
            .eq("user_id", user_id)
            .eq("id", name_id),
            "update_name",
        )
        if not result.data:
            return None
        return self._map_to_name(result.data[0])

    def clear_preferred(self, user_id: str, except_name_id: Optional[str] = None) -> None:
        """Unset is_preferred on the user's names, optionally sparing one."""
        query = (
            self._db.table(NAMES_TABLE)
            .update({
                "is_preferred": False,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("user_id", user_id)
            .eq("is_preferred", True)
        )
        if except_name_id is not None:
            query = query.neq("id", except_name_id)
        self._execute(query, "clear_preferred")

    def delete_name(self, user_id: str, name_id: str) -> bool:
        result = self._execute(
            self._db.table(NAMES_TABLE)
            .delete()
            .eq("user_id", user_id)
            .eq("id", name_id),
            "delete_name",
        )
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _map_to_name(self, data: dict[str, Any]) -> Name:
        """Map database row to Name model."""
        return Name(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            name_text=data["name_text"],
            category=_parse_category(data.get("category")),
            is_preferred=bool(data.get("is_preferred", False)),
            verified=bool(data.get("verified", False)),
            source=data.get("source"),
            created_at=data["created_at"],
            updated_at=data.get("updated_at"),
        )
