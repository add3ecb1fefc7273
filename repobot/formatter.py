"""
Rendering of GitHub payloads into structured responses.

The render_* functions are pure: payload in, StructuredResponse out. The
*_response functions are the fetch sites; they call the GitHub client and turn
any not-found or API failure into an error response instead of raising.
"""
import base64
import binascii
from dataclasses import dataclass

from repobot.constants import (
    CLOSED_COLOR,
    DIRECTORY_ICONS,
    IMAGE_EXTENSIONS,
    OPEN_COLOR,
    USER_REPOS_PAGE_SIZE,
)
from repobot.github_client import GitHubClient, GitHubError, GitHubNotFound
from repobot.logger import logger
from repobot.repository import RepositoryReference, invalid_repository_message, parse_repository
from repobot.responses import (
    Author,
    Field,
    StructuredResponse,
    bounded,
    bounded_description,
    failure,
)
from repobot.utils import file_extension, format_date

NO_DESCRIPTION = "_No description._"
ROOT_PATHS = {"", ".", "/", "./"}


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    type: str
    url: str


def link(url: str | None, text: str) -> str:
    return f"<{url}|{text}>" if url else text


# --- Users ---

def render_user(user: dict) -> StructuredResponse:
    login = user.get("login", "")
    name = user.get("name") or login
    bio = user.get("bio") or "No bio."
    location = user.get("location") or "Unknown location"
    description = (
        f"*{link(user.get('html_url'), name)}* - _{bio}_\n\n"
        f"*{location}* - *{user.get('followers', 0)}* followers - *{user.get('following', 0)}* following"
    )
    return StructuredResponse(
        title=login,
        url=user.get("html_url"),
        thumbnail_url=user.get("avatar_url"),
        description=bounded(description, f"*{link(user.get('html_url'), name)}*"),
    )


def repository_fields(repos: list[dict]) -> tuple[Field, ...]:
    fields = []
    for repo in repos[:USER_REPOS_PAGE_SIZE]:
        name = repo["name"]
        if repo.get("fork"):
            name = f"{name} _(Fork)_"
        fields.append(Field(
            name=name,
            value=f"{repo.get('description') or NO_DESCRIPTION} {link(repo.get('html_url'), '↗')}",
            inline=True,
        ))
    return tuple(fields)


def user_response(github: GitHubClient, username: str, show_repositories: bool = False) -> StructuredResponse:
    try:
        user = github.get_user(username)
    except GitHubNotFound:
        logger.info("GitHub user %s not found", username)
        return failure(f"User {username} not found on GitHub.")
    except GitHubError as e:
        logger.exception("Failed to fetch GitHub user %s: %s", username, e)
        return failure(f"Failed to fetch user {username} from GitHub.")

    response = render_user(user)
    if not show_repositories:
        return response

    try:
        repos = github.list_user_repos(username)
    except GitHubError as e:
        logger.exception("Failed to fetch repositories for %s: %s", username, e)
        return response.with_fields(Field(name="_Failed to fetch repositories._", value=str(e)))
    return response.with_fields(*repository_fields(repos))


# --- Repositories ---

def render_repository(repo: dict) -> StructuredResponse:
    stats = (
        f"*{repo.get('stargazers_count', 0)}* stars - *{repo.get('forks_count', 0)}* forks"
        f" - *{repo.get('open_issues_count', 0)}* issues"
    )
    return StructuredResponse(
        title=repo["full_name"],
        url=repo.get("html_url"),
        description=bounded(f"{repo.get('description') or NO_DESCRIPTION}\n\n{stats}", stats),
        thumbnail_url=(repo.get("owner") or {}).get("avatar_url"),
    )


def _parse_or_fail(repo_name: str) -> RepositoryReference | StructuredResponse:
    ref = parse_repository(repo_name)
    if ref is None:
        return failure(invalid_repository_message(repo_name))
    return ref


def repository_response(github: GitHubClient, repo_name: str) -> StructuredResponse:
    ref = _parse_or_fail(repo_name)
    if isinstance(ref, StructuredResponse):
        return ref
    try:
        repo = github.get_repo(ref.owner, ref.name)
    except GitHubNotFound:
        logger.info("Repository %s not found", repo_name)
        return failure(f"Repository {repo_name} not found on GitHub.")
    except GitHubError as e:
        logger.exception("Failed to fetch repository %s: %s", repo_name, e)
        return failure(f"Failed to fetch repository {repo_name} from GitHub.")
    return render_repository(repo)


# --- Issues and pull requests ---

def issue_state(issue: dict) -> str:
    pull_request = issue.get("pull_request") or {}
    if pull_request.get("merged_at"):
        return "merged"
    return issue.get("state", "open")


def render_issue(issue: dict) -> StructuredResponse:
    state = issue_state(issue)
    kind = "Pull request" if issue.get("pull_request") else "Issue"
    user = issue.get("user") or {}
    reactions = (issue.get("reactions") or {}).get("total_count", 0)
    stats = f"{kind} *{state}* - *{issue.get('comments', 0)}* comments - *{reactions}* reactions"
    body = issue.get("body") or "_No description provided._"
    return StructuredResponse(
        title=f"#{issue['number']} {issue.get('title', '')}",
        url=issue.get("html_url"),
        color=OPEN_COLOR if state == "open" else CLOSED_COLOR,
        author=Author(name=user.get("login", "ghost"), icon_url=user.get("avatar_url"), url=user.get("html_url")),
        description=bounded(f"{body}\n\n{stats}", f"_Description is too large to display._\n\n{stats}"),
        fields=(
            Field(name="Created", value=format_date(issue.get("created_at")), inline=True),
            Field(name="Updated", value=format_date(issue.get("updated_at")), inline=True),
        ),
    )


def issue_response(github: GitHubClient, repo_name: str, number: int) -> StructuredResponse:
    ref = _parse_or_fail(repo_name)
    if isinstance(ref, StructuredResponse):
        return ref
    try:
        issue = github.get_issue(ref.owner, ref.name, number)
    except GitHubNotFound:
        logger.info("Issue/PR #%s not found in %s", number, repo_name)
        return failure(f"PR/Issue #{number} not found in {repo_name}.")
    except GitHubError as e:
        logger.exception("Failed to fetch PR/Issue #%s in %s: %s", number, repo_name, e)
        return failure(f"Failed to fetch PR/Issue #{number} from {repo_name}.")
    return render_issue(issue)


# --- Directories ---

def sort_directory_entries(entries: list[DirectoryEntry]) -> list[DirectoryEntry]:
    """Directories first, then everything else; case-insensitive by name within each group."""
    return sorted(entries, key=lambda entry: (entry.type != "dir", entry.name.lower(), entry.name))


def render_directory(ref: RepositoryReference, path: str, items: list[dict]) -> StructuredResponse:
    entries = sort_directory_entries([
        DirectoryEntry(name=item["name"], type=item.get("type", "file"), url=item.get("html_url", ""))
        for item in items
    ])
    display_path = path.strip("/") if path not in ROOT_PATHS else ""
    if entries:
        listing = "\n".join(
            f"{DIRECTORY_ICONS.get(entry.type, DIRECTORY_ICONS['file'])} {link(entry.url, entry.name)}"
            for entry in entries
        )
    else:
        listing = "_This directory is empty._"

    tree_url = f"https://github.com/{ref.full_name}"
    if display_path:
        tree_url = f"{tree_url}/tree/HEAD/{display_path}"
    return StructuredResponse(
        title=f"{ref.full_name}/{display_path}" if display_path else ref.full_name,
        url=tree_url,
        description=bounded(listing, f"{len(entries)} files, too large to list."),
    )


# --- Files ---

def decode_content(item: dict) -> str | None:
    """Decoded text of a file payload, or None if it is missing or not text."""
    content = item.get("content")
    if not content or item.get("encoding", "base64") != "base64":
        return None
    try:
        return base64.b64decode(content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None


def render_file(path: str, item: dict) -> StructuredResponse:
    extension = file_extension(path)
    download_url = item.get("download_url")
    header = f"{link(download_url, 'Download')} - {item.get('size', 0)} bytes"
    title = item.get("path") or path

    if extension in IMAGE_EXTENSIONS:
        return StructuredResponse(
            title=title,
            url=item.get("html_url"),
            description=header,
            image_url=download_url,
        )

    text = decode_content(item) if item.get("type", "file") == "file" else None
    if text is None:
        body = "_File content is not available to display._"
    elif extension == "md":
        body = text
    else:
        body = f"```{extension}\n{text}\n```"
    return StructuredResponse(
        title=title,
        url=item.get("html_url"),
        description=bounded_description(header, body, "_File is too large to display._"),
    )


def content_response(github: GitHubClient, repo_name: str, path: str) -> StructuredResponse:
    ref = _parse_or_fail(repo_name)
    if isinstance(ref, StructuredResponse):
        return ref
    api_path = "" if path.strip() in ROOT_PATHS else path.strip()
    try:
        content = github.get_content(ref.owner, ref.name, api_path)
    except GitHubNotFound:
        logger.info("Path %s not found in %s", path, repo_name)
        return failure(f"File {path} not found in {repo_name}.")
    except GitHubError as e:
        logger.exception("Failed to fetch %s from %s: %s", path, repo_name, e)
        return failure(f"Failed to fetch {path} from {repo_name}.")

    if isinstance(content, list):
        return render_directory(ref, api_path, content)
    return render_file(api_path, content)
