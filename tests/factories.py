"""
Model builders for tests.

Timestamps default to a fixed base plus `age` seconds so ordering by
created_at is deterministic.
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional
from unittest.mock import MagicMock

from modules.assignments.models import Assignment
from modules.contexts.models import Context
from modules.names.models import Name, NameCategory
from shared.models import OIDCProperty

USER_ID = "test-user-123"
BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def at(age: int) -> datetime:
    return BASE_TIME + timedelta(seconds=age)


def make_name(
    name_id: str,
    text: str,
    is_preferred: bool = False,
    category=NameCategory.NICKNAME,
    age: int = 0,
    user_id: str = USER_ID,
) -> Name:
    return Name(
        id=name_id,
        user_id=user_id,
        name_text=text,
        category=category,
        is_preferred=is_preferred,
        created_at=at(age),
    )


def make_context(
    context_id: str,
    context_name: str,
    is_permanent: bool = False,
    age: int = 0,
    user_id: str = USER_ID,
) -> Context:
    return Context(
        id=context_id,
        user_id=user_id,
        context_name=context_name,
        is_permanent=is_permanent,
        created_at=at(age),
    )


def make_assignment(
    assignment_id: str,
    context: Context,
    name: Name,
    oidc_property: Optional[OIDCProperty] = None,
    age: int = 0,
) -> Assignment:
    return Assignment(
        id=assignment_id,
        user_id=context.user_id,
        context_id=context.id,
        name_id=name.id,
        oidc_property=oidc_property,
        created_at=at(age),
        context_name=context.context_name,
        context_is_permanent=context.is_permanent,
        name_text=name.name_text,
    )


QUERY_METHODS = (
    "select", "insert", "update", "upsert", "delete",
    "eq", "neq", "in_", "is_", "gt", "order", "limit",
)


def mock_db(data=None, count=None) -> MagicMock:
    """
    A Supabase client whose query builder chains back to itself.

    Every `.execute()` returns `data`; the builder is reachable as
    `db.query` for call assertions.
    """
    query = MagicMock()
    for method in QUERY_METHODS:
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data if data is not None else [], count=count)
    db = MagicMock()
    db.table.return_value = query
    db.query = query
    return db


class InMemoryStore:
    """ResolutionStore over plain lists, counting reads."""

    def __init__(
        self,
        names: list[Name] = (),
        contexts: list[Context] = (),
        assignments: list[Assignment] = (),
        users: Iterable[str] = (USER_ID,),
    ):
        self.names = list(names)
        self.contexts = list(contexts)
        self.assignments = list(assignments)
        self.users = set(users)
        self.calls: list[str] = []

    def find_assignments(self, user_id, context_id=None, oidc_property=None, context_ids=None):
        self.calls.append("find_assignments")
        rows = [a for a in self.assignments if a.user_id == user_id]
        if context_id is not None:
            rows = [a for a in rows if a.context_id == context_id]
        if oidc_property is not None:
            rows = [a for a in rows if a.oidc_property == oidc_property]
        if context_ids is not None:
            ids = set(context_ids)
            rows = [a for a in rows if a.context_id in ids]
        return rows

    def find_preferred_names(self, user_id):
        self.calls.append("find_preferred_names")
        return [n for n in self.names if n.user_id == user_id and n.is_preferred]

    def find_names_by_ids(self, user_id, ids):
        self.calls.append("find_names_by_ids")
        wanted = set(ids)
        return [n for n in self.names if n.user_id == user_id and n.id in wanted]

    def find_contexts_by_ids(self, user_id, ids):
        wanted = set(ids)
        return [c for c in self.contexts if c.user_id == user_id and c.id in wanted]

    def find_context_by_name(self, user_id, context_name) -> Optional[Context]:
        return next((c for c in self.contexts if c.user_id == user_id and c.context_name == context_name), None)

    def user_exists(self, user_id):
        self.calls.append("user_exists")
        return user_id in self.users

    def upsert_assignment(self, user_id, context_id, name_id, oidc_property=None):
        raise AssertionError("resolver must not write")

    def delete_assignment(self, user_id, context_id, oidc_property=None):
        raise AssertionError("resolver must not write")
