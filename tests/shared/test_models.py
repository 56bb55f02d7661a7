"""
Tests for shared models.
"""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from shared.models import AuthenticatedUser, OIDCProperty, REQUIRED_OIDC_PROPERTIES


class TestAuthenticatedUser:
    """Tests for the AuthenticatedUser model in shared."""

    def test_create_with_required_fields(self):
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
        )
        assert user.id == "user-123"
        assert user.email == "test@example.com"

    def test_default_values(self):
        """Should have correct default values."""
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
        )
        assert user.email_verified is False
        assert user.role == "user"
        assert user.created_at is None
        assert user.last_sign_in is None

    def test_all_fields(self):
        now = datetime.now(timezone.utc)
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            email_verified=True,
            created_at=now,
            last_sign_in=now,
            role="admin",
        )
        assert user.email_verified is True
        assert user.role == "admin"
        assert user.created_at == now

    def test_email_validation(self):
        """Should validate email format."""
        with pytest.raises(ValidationError):
            AuthenticatedUser(
                id="user-123",
                email="not-an-email",
            )

    def test_immutability(self):
        """Should be frozen/immutable."""
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
        )
        with pytest.raises(ValidationError):
            user.id = "new-id"

    def test_extra_fields_ignored(self):
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            extra_field="ignored",  # type: ignore
        )
        assert not hasattr(user, "extra_field")


class TestOIDCProperty:
    def test_values(self):
        assert {p.value for p in OIDCProperty} == {
            "given_name",
            "family_name",
            "name",
            "nickname",
            "display_name",
            "preferred_username",
            "middle_name",
        }

    def test_parse_from_string(self):
        assert OIDCProperty("given_name") is OIDCProperty.GIVEN_NAME

    def test_required_properties(self):
        assert REQUIRED_OIDC_PROPERTIES == {
            OIDCProperty.GIVEN_NAME,
            OIDCProperty.FAMILY_NAME,
            OIDCProperty.NAME,
        }
