import pytest

from repobot.quick_ref import FileTrigger, IssueTrigger, handle_quick_reference, parse_trigger
from repobot.settings_store import ServerSettings

ENABLED = ServerSettings(server_id="T1", default_repo="octocat/hello-world", quick_ref_enabled=True)
DISABLED = ServerSettings(server_id="T1", default_repo="octocat/hello-world", quick_ref_enabled=False)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("##123", IssueTrigger(123)),
        ("##7 is the one we need", IssueTrigger(7)),
        ("//README.md", FileTrigger("README.md")),
        ("//src/app.py please look", FileTrigger("src/app.py")),
        ("##abc", None),
        ("##", None),
        ("//", None),
        ("## 12", None),
        ("see ##12", None),
        ("hello world", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_trigger(text, expected):
    assert parse_trigger(text) == expected


@pytest.mark.parametrize("settings", [None, DISABLED])
def test_disabled_or_missing_settings_produce_no_response(settings, github):
    assert handle_quick_reference("##123", settings, github) is None
    assert handle_quick_reference("//README.md", settings, github) is None
    github.get_issue.assert_not_called()
    github.get_content.assert_not_called()


def test_issue_trigger_uses_default_repository(github):
    github.get_issue.return_value = {"number": 123, "title": "Bug", "state": "open"}
    response = handle_quick_reference("##123", ENABLED, github)
    github.get_issue.assert_called_once_with("octocat", "hello-world", 123)
    assert response.title == "#123 Bug"
    assert not response.error


def test_file_trigger_uses_default_repository(github):
    github.get_content.return_value = []
    response = handle_quick_reference("//docs", ENABLED, github)
    github.get_content.assert_called_once_with("octocat", "hello-world", "docs")
    assert response.description == "_This directory is empty._"


def test_plain_message_is_ignored_when_enabled(github):
    assert handle_quick_reference("just chatting", ENABLED, github) is None
