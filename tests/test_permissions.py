from unittest.mock import MagicMock

from slack_sdk.errors import SlackApiError

from repobot.permissions import can_manage_server


def client_for(user):
    client = MagicMock()
    client.users_info.return_value = {"ok": True, "user": user}
    return client


def test_admins_and_owners_can_manage():
    assert can_manage_server(client_for({"is_admin": True}), "U1")
    assert can_manage_server(client_for({"is_owner": True}), "U1")


def test_regular_members_cannot_manage():
    assert not can_manage_server(client_for({"is_admin": False, "is_owner": False}), "U1")


def test_lookup_failure_denies():
    client = MagicMock()
    client.users_info.side_effect = SlackApiError("user_not_found", {"ok": False, "error": "user_not_found"})
    assert not can_manage_server(client, "U1")
