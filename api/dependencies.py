"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations over a shared
Supabase client.

Routes only ever see the interfaces, so tests can swap any service with
app.dependency_overrides.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.assignments.interfaces import IAssignmentService
    from modules.assignments.repository import AssignmentRepository
    from modules.contexts.interfaces import IContextService
    from modules.contexts.repository import ContextRepository
    from modules.names.interfaces import INameService
    from modules.names.repository import NameRepository
    from modules.oauth.interfaces import IOAuthService
    from modules.resolution.interfaces import IResolutionService
    from modules.resolution.resolver import ResolutionStore


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._db: "Client | None" = None
        self._name_repository: "NameRepository | None" = None
        self._context_repository: "ContextRepository | None" = None
        self._assignment_repository: "AssignmentRepository | None" = None
        self._resolution_store: "ResolutionStore | None" = None
        self._name_service: "INameService | None" = None
        self._context_service: "IContextService | None" = None
        self._assignment_service: "IAssignmentService | None" = None
        self._resolution_service: "IResolutionService | None" = None
        self._oauth_service: "IOAuthService | None" = None

    @property
    def db(self) -> "Client":
        """Get the Supabase client shared by all repositories."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client()
        return self._db

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def name_repository(self) -> "NameRepository":
        if self._name_repository is None:
            from modules.names.repository import NameRepository
            self._name_repository = NameRepository(self.db)
        return self._name_repository

    @property
    def context_repository(self) -> "ContextRepository":
        if self._context_repository is None:
            from modules.contexts.repository import ContextRepository
            self._context_repository = ContextRepository(self.db)
        return self._context_repository

    @property
    def assignment_repository(self) -> "AssignmentRepository":
        if self._assignment_repository is None:
            from modules.assignments.repository import AssignmentRepository
            self._assignment_repository = AssignmentRepository(self.db)
        return self._assignment_repository

    @property
    def resolution_store(self) -> "ResolutionStore":
        """Get the store the name resolver reads through."""
        if self._resolution_store is None:
            from modules.resolution.store import SupabaseResolutionStore
            self._resolution_store = SupabaseResolutionStore(
                self.db,
                names=self.name_repository,
                contexts=self.context_repository,
                assignments=self.assignment_repository,
            )
        return self._resolution_store

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def names(self) -> "INameService":
        """Get the name service instance."""
        if self._name_service is None:
            from modules.names.service import NameService
            self._name_service = NameService(
                repository=self.name_repository,
                assignments=self.assignment_repository,
            )
        return self._name_service

    @property
    def contexts(self) -> "IContextService":
        """Get the context service instance."""
        if self._context_service is None:
            from modules.contexts.service import ContextService
            self._context_service = ContextService(
                repository=self.context_repository,
                assignments=self.assignment_repository,
            )
        return self._context_service

    @property
    def assignments(self) -> "IAssignmentService":
        """Get the assignment service instance."""
        if self._assignment_service is None:
            from modules.assignments.service import AssignmentService
            self._assignment_service = AssignmentService(
                repository=self.assignment_repository,
                contexts=self.context_repository,
                names=self.name_repository,
            )
        return self._assignment_service

    @property
    def resolution(self) -> "IResolutionService":
        """Get the resolution service instance."""
        if self._resolution_service is None:
            from modules.resolution.resolver import NameResolver
            from modules.resolution.service import ResolutionService
            from shared.config import get_settings
            resolver = NameResolver(
                self.resolution_store,
                fallback_name=get_settings().resolution_fallback_name,
            )
            self._resolution_service = ResolutionService(resolver)
        return self._resolution_service

    @property
    def oauth(self) -> "IOAuthService":
        """Get the OAuth service instance."""
        if self._oauth_service is None:
            from modules.oauth.repository import OAuthRepository
            from modules.oauth.service import OAuthService
            self._oauth_service = OAuthService(
                repository=OAuthRepository(self.db),
                contexts=self.context_repository,
                resolution=self.resolution,
            )
        return self._oauth_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._db = None
        self._name_repository = None
        self._context_repository = None
        self._assignment_repository = None
        self._resolution_store = None
        self._name_service = None
        self._context_service = None
        self._assignment_service = None
        self._resolution_service = None
        self._oauth_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_name_service() -> "INameService":
    """FastAPI dependency for name service."""
    return get_container().names


def get_context_service() -> "IContextService":
    """FastAPI dependency for context service."""
    return get_container().contexts


def get_assignment_service() -> "IAssignmentService":
    """FastAPI dependency for assignment service."""
    return get_container().assignments


def get_resolution_service() -> "IResolutionService":
    """FastAPI dependency for resolution service."""
    return get_container().resolution


def get_oauth_service() -> "IOAuthService":
    """FastAPI dependency for OAuth service."""
    return get_container().oauth
