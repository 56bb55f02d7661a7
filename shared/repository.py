"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating client failures into
DatabaseError so services only ever see TrueNameError subclasses.
"""

from typing import Any, TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import DatabaseError


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - _execute() to run a query builder and normalize failures
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally. Every method takes the
    owning user_id and filters on it.

    Example:
        class NameRepository(BaseRepository[Name]):
            def get_by_id(self, user_id: str, name_id: str) -> Optional[Name]:
                result = self._execute(
                    self._db.table("names").select("*")
                    .eq("user_id", user_id).eq("id", name_id),
                    "get_name",
                )
                if not result.data:
                    return None
                return self._map_to_name(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any, operation: str) -> Any:
        """
        Execute a PostgREST query builder.

        Args:
            query: Query builder returned by the Supabase client.
            operation: Short label used in error messages and logs.

        Returns:
            The PostgREST response (with .data and .count).

        Raises:
            DatabaseError: If PostgREST rejects the query or the request fails.
        """
        try:
            return query.execute()
        except APIError as e:
            raise DatabaseError(
                operation,
                e.message or str(e),
                details={"db_code": e.code},
            ) from e
        except httpx.HTTPError as e:
            raise DatabaseError(operation, str(e)) from e
