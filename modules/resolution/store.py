"""
Supabase-backed ResolutionStore.

Combines the name, context and assignment repositories behind the single
store interface the resolver depends on, and adds the profile lookup.
"""

from typing import Iterable, Optional

from supabase import Client

from shared.models import OIDCProperty
from shared.repository import BaseRepository

from modules.assignments.models import Assignment
from modules.assignments.repository import AssignmentRepository
from modules.contexts.models import Context
from modules.contexts.repository import ContextRepository
from modules.names.models import Name
from modules.names.repository import NameRepository

PROFILES_TABLE = "profiles"


class SupabaseResolutionStore(BaseRepository[Assignment]):
    """ResolutionStore over the Supabase tables."""

    def __init__(
        self,
        db: Client,
        names: NameRepository,
        contexts: ContextRepository,
        assignments: AssignmentRepository,
    ) -> None:
        super().__init__(db)
        self._names = names
        self._contexts = contexts
        self._assignments = assignments

    def user_exists(self, user_id: str) -> bool:
        result = self._execute(
            self._db.table(PROFILES_TABLE)
            .select("id")
            .eq("id", user_id)
            .limit(1),
            "user_exists",
        )
        return bool(result.data)

    def find_assignments(
        self,
        user_id: str,
        context_id: Optional[str] = None,
        oidc_property: Optional[OIDCProperty] = None,
        context_ids: Optional[Iterable[str]] = None,
    ) -> list[Assignment]:
        return self._assignments.find_assignments(
            user_id,
            context_id=context_id,
            oidc_property=oidc_property,
            context_ids=context_ids,
        )

    def find_preferred_names(self, user_id: str) -> list[Name]:
        return self._names.find_preferred_names(user_id)

    def find_names_by_ids(self, user_id: str, ids: Iterable[str]) -> list[Name]:
        return self._names.find_names_by_ids(user_id, ids)

    def find_contexts_by_ids(self, user_id: str, ids: Iterable[str]) -> list[Context]:
        return self._contexts.find_contexts_by_ids(user_id, ids)

    def find_context_by_name(self, user_id: str, context_name: str) -> Optional[Context]:
        return self._contexts.find_context_by_name(user_id, context_name)

    def upsert_assignment(
        self,
        user_id: str,
        context_id: str,
        name_id: str,
        oidc_property: Optional[OIDCProperty] = None,
    ) -> Assignment:
        return self._assignments.upsert_assignment(user_id, context_id, name_id, oidc_property)

    def delete_assignment(
        self,
        user_id: str,
        context_id: str,
        oidc_property: Optional[OIDCProperty] = None,
    ) -> bool:
        return self._assignments.delete_assignment(user_id, context_id, oidc_property)
