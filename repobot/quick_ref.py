"""
Quick references: "##123" and "//path/to/file" at the start of a chat message
are looked up against the server's default repository, when the server has
opted in.
"""
from dataclasses import dataclass

from repobot.formatter import content_response, issue_response
from repobot.github_client import GitHubClient
from repobot.logger import logger
from repobot.responses import StructuredResponse
from repobot.settings_store import ServerSettings

ISSUE_PREFIX = "##"
FILE_PREFIX = "//"


@dataclass(frozen=True)
class IssueTrigger:
    number: int


@dataclass(frozen=True)
class FileTrigger:
    path: str


def parse_trigger(text: str | None) -> IssueTrigger | FileTrigger | None:
    """Recognise a quick reference in the first whitespace-delimited token."""
    tokens = (text or "").split(maxsplit=1)
    if not tokens:
        return None
    token = tokens[0]

    if token.startswith(ISSUE_PREFIX):
        digits = token[len(ISSUE_PREFIX):]
        if digits.isascii() and digits.isdigit():
            return IssueTrigger(number=int(digits))
        return None

    if token.startswith(FILE_PREFIX):
        path = token[len(FILE_PREFIX):]
        if path:
            return FileTrigger(path=path)
        return None

    return None


def handle_quick_reference(
    text: str | None,
    settings: ServerSettings | None,
    github: GitHubClient,
) -> StructuredResponse | None:
    """
    Response for a chat message, or None when quick references are disabled
    for the server or the message holds no trigger.
    """
    if settings is None or not settings.quick_ref_enabled:
        return None

    trigger = parse_trigger(text)
    if trigger is None:
        return None

    logger.debug("Quick reference %s for server_id=%s", trigger, settings.server_id)
    if isinstance(trigger, IssueTrigger):
        return issue_response(github, settings.default_repo, trigger.number)
    return content_response(github, settings.default_repo, trigger.path)
