from unittest.mock import MagicMock

import pytest
import requests

from repobot.github_client import GitHubClient, GitHubError, GitHubNotFound


def make_client(status_code=200, payload=None, reason="OK"):
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload if payload is not None else {}
    session.get.return_value = response
    return GitHubClient(token="ghp_test", base_url="https://api.github.test/", session=session), session


def test_token_and_headers_are_set():
    client, session = make_client()
    assert session.headers["Authorization"] == "Bearer ghp_test"
    assert session.headers["Accept"] == "application/vnd.github+json"
    assert client.base_url == "https://api.github.test"


def test_list_user_repos_requests_recent_first_page():
    client, session = make_client(payload=[{"name": "a"}])
    assert client.list_user_repos("octocat") == [{"name": "a"}]
    session.get.assert_called_once_with(
        "https://api.github.test/users/octocat/repos",
        params={"per_page": 9, "sort": "updated"},
        timeout=client.timeout,
    )


def test_get_content_strips_slashes():
    client, session = make_client(payload=[])
    client.get_content("octocat", "hello-world", "/docs/guide/")
    url = session.get.call_args.args[0]
    assert url == "https://api.github.test/repos/octocat/hello-world/contents/docs/guide"


def test_get_issue_url():
    client, session = make_client(payload={"number": 3})
    client.get_issue("octocat", "hello-world", 3)
    assert session.get.call_args.args[0] == "https://api.github.test/repos/octocat/hello-world/issues/3"


def test_not_found_raises_specific_error():
    client, _ = make_client(status_code=404, reason="Not Found")
    with pytest.raises(GitHubNotFound):
        client.get_user("ghost-user")


def test_api_error_carries_message():
    client, _ = make_client(status_code=403, payload={"message": "API rate limit exceeded"}, reason="Forbidden")
    with pytest.raises(GitHubError) as excinfo:
        client.get_repo("octocat", "hello-world")
    assert excinfo.value.status_code == 403
    assert "API rate limit exceeded" in str(excinfo.value)


def test_network_failure_is_wrapped():
    client, session = make_client()
    session.get.side_effect = requests.exceptions.ConnectionError("down")
    with pytest.raises(GitHubError) as excinfo:
        client.get_user("octocat")
    assert not isinstance(excinfo.value, GitHubNotFound)


def test_from_env(monkeypatch):
    monkeypatch.setenv("GH_TOKEN", "ghp_env")
    monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")
    client = GitHubClient.from_env()
    assert client.base_url == "https://ghe.example.com/api/v3"
    assert client.session.headers["Authorization"] == "Bearer ghp_env"


def test_non_json_success_body_is_wrapped():
    client, session = make_client()
    session.get.return_value.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    with pytest.raises(GitHubError) as excinfo:
        client.get_repo("octocat", "hello-world")
    assert excinfo.value.status_code == 200
    assert not isinstance(excinfo.value, GitHubNotFound)
