"""Tests for the OAuth repository."""

from modules.oauth.repository import OAuthRepository

from tests.factories import USER_ID, mock_db


def session_row(**overrides) -> dict:
    row = {
        "session_token": "tnp_abc123",
        "profile_id": USER_ID,
        "client_id": "demo-hr",
        "expires_at": "2030-01-01T00:00:00+00:00",
        "used_at": None,
    }
    row.update(overrides)
    return row


class TestSessions:
    def test_active_session(self):
        db = mock_db([session_row()])

        session = OAuthRepository(db).get_active_session("tnp_abc123")

        assert session.profile_id == USER_ID
        db.table.assert_called_with("oauth_sessions")
        assert db.query.gt.call_args[0][0] == "expires_at"

    def test_expired_or_unknown(self):
        assert OAuthRepository(mock_db([])).get_active_session("tnp_nope") is None

    def test_mark_used(self):
        db = mock_db([session_row()])
        OAuthRepository(db).mark_session_used("tnp_abc123")
        assert "used_at" in db.query.update.call_args[0][0]
        db.query.eq.assert_called_with("session_token", "tnp_abc123")


class TestClients:
    def test_get_client(self):
        db = mock_db([{"client_id": "demo-hr", "app_name": "Demo HR", "display_name": None}])
        client = OAuthRepository(db).get_client("demo-hr")
        assert client.app_name == "Demo HR"

    def test_unknown_client(self):
        assert OAuthRepository(mock_db([])).get_client("nope") is None


class TestAppAssignments:
    def test_upsert_on_profile_and_client(self):
        db = mock_db([{"profile_id": USER_ID, "client_id": "demo-hr", "context_id": "c1"}])

        assignment = OAuthRepository(db).upsert_app_assignment(USER_ID, "demo-hr", "c1")

        assert assignment.context_id == "c1"
        assert db.query.upsert.call_args[1]["on_conflict"] == "profile_id,client_id"

    def test_list_for_profile(self):
        db = mock_db([{"profile_id": USER_ID, "client_id": "demo-hr", "context_id": "c1"}])

        [assignment] = OAuthRepository(db).list_app_assignments(USER_ID)

        assert assignment.client_id == "demo-hr"
        db.query.eq.assert_called_with("profile_id", USER_ID)


class TestConnectedAppQueries:
    def test_find_clients(self):
        db = mock_db([{"client_id": "demo-hr", "app_name": "Demo HR", "display_name": "HR"}])

        [client] = OAuthRepository(db).find_clients(["demo-hr", "demo-hr"])

        assert client.display_name == "HR"
        db.query.in_.assert_called_once_with("client_id", ["demo-hr"])

    def test_find_clients_empty(self):
        db = mock_db([])
        assert OAuthRepository(db).find_clients([]) == []
        db.query.execute.assert_not_called()

    def test_count_active_sessions(self):
        db = mock_db([{"client_id": "demo-hr"}, {"client_id": "demo-hr"}, {"client_id": "chat"}])

        counts = OAuthRepository(db).count_active_sessions(USER_ID)

        assert counts == {"demo-hr": 2, "chat": 1}
        assert db.query.gt.call_args[0][0] == "expires_at"
