"""
Repository references and the rules for picking which repository a request targets.
"""
from dataclasses import dataclass
from typing import Callable

from pymongo.errors import PyMongoError

from repobot.config import get_process_default_repo
from repobot.constants import FALLBACK_REPO
from repobot.logger import logger
from repobot.settings_store import ServerSettings, find_settings


@dataclass(frozen=True)
class RepositoryReference:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def parse_repository(text: str | None) -> RepositoryReference | None:
    """
    Parse an "owner/repo" string. Returns None unless the text holds exactly
    one '/' with something on both sides of it.
    """
    if not text:
        return None
    parts = text.strip().split("/")
    if len(parts) != 2:
        return None
    owner, name = (part.strip() for part in parts)
    if not owner or not name:
        return None
    return RepositoryReference(owner=owner, name=name)


def invalid_repository_message(text: str) -> str:
    return f'Invalid repository format: {text}. Expected "owner/repo".'


def choose_repository(
    explicit: str | None,
    settings: ServerSettings | None,
    process_default: str | None = None,
) -> str:
    """
    First available of: explicit input, the server's default repository,
    the process default, the hardcoded fallback.
    """
    if explicit and explicit.strip():
        return explicit.strip()
    if settings is not None and settings.default_repo:
        return settings.default_repo
    if process_default:
        return process_default
    return FALLBACK_REPO


def load_settings_quietly(server_id: str | None, collection=None) -> ServerSettings | None:
    """
    Settings lookup used for resolution: an unreachable store or a malformed
    server id degrades to "no settings" instead of failing the request.
    """
    if not server_id:
        return None
    try:
        return find_settings(server_id, collection=collection)
    except (PyMongoError, ValueError) as e:
        logger.warning("Settings lookup failed for server_id=%s, using defaults: %s", server_id, e)
        return None


def resolve_repository(
    explicit: str | None,
    server_id: str | None,
    collection=None,
    lookup: Callable[[str | None], ServerSettings | None] | None = None,
) -> str:
    """
    Repository a request targets. The server's settings are only looked up
    when no explicit repository was given; pass lookup to reuse settings
    already loaded for the request.
    """
    if explicit and explicit.strip():
        return explicit.strip()
    if lookup is None:
        settings = load_settings_quietly(server_id, collection=collection)
    else:
        settings = lookup(server_id)
    return choose_repository(None, settings, get_process_default_repo())
