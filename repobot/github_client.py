"""
Read-only GitHub REST client.

Only the handful of endpoints the bot renders are wrapped. A single attempt is
made per call; failures surface as GitHubError (GitHubNotFound for 404s).
"""
import os
from urllib.parse import quote

import requests

from repobot.constants import GITHUB_API_TIMEOUT_SECONDS, GITHUB_API_URL, USER_REPOS_PAGE_SIZE
from repobot.logger import logger


class GitHubError(Exception):
    """Raised when a GitHub API request fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class GitHubNotFound(GitHubError):
    """Raised when the requested user, repository, issue or path does not exist."""

    pass


class GitHubClient:
    def __init__(
        self,
        token: str | None = None,
        base_url: str = GITHUB_API_URL,
        timeout: float = GITHUB_API_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "repobot/1.0",
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    @classmethod
    def from_env(cls) -> "GitHubClient":
        return cls(
            token=os.environ.get("GH_TOKEN"),
            base_url=os.getenv("GITHUB_API_URL") or GITHUB_API_URL,
        )

    def _get(self, path: str, params: dict | None = None):
        url = f"{self.base_url}{path}"
        logger.debug("GitHub GET %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise GitHubError(f"Request to GitHub failed: {e}") from e

        if response.status_code == 404:
            raise GitHubNotFound("Not Found", status_code=404)
        if response.status_code >= 400:
            try:
                message = response.json().get("message") or response.reason
            except ValueError:
                message = response.reason
            raise GitHubError(f"GitHub API error {response.status_code}: {message}", status_code=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise GitHubError("GitHub returned a response that is not JSON", status_code=response.status_code) from e

    def get_user(self, username: str) -> dict:
        return self._get(f"/users/{quote(username, safe='')}")

    def list_user_repos(self, username: str, per_page: int = USER_REPOS_PAGE_SIZE) -> list[dict]:
        return self._get(
            f"/users/{quote(username, safe='')}/repos",
            params={"per_page": per_page, "sort": "updated"},
        )

    def get_repo(self, owner: str, repo: str) -> dict:
        return self._get(f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}")

    def get_issue(self, owner: str, repo: str, number: int) -> dict:
        """Issues and pull requests share the same number space and endpoint."""
        return self._get(f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/issues/{int(number)}")

    def get_content(self, owner: str, repo: str, path: str = "") -> dict | list[dict]:
        """
        File or directory content. A dict for files (base64 body in "content"),
        a list of entries for directories.
        """
        path = quote(path.strip("/"), safe="/")
        return self._get(f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/contents/{path}")
