"""
Slash command routing.

Each command name maps to an option parser and a handler. Handlers receive
their own typed options plus a RequestContext holding the server's settings,
loaded once per request.
"""
import time
from dataclasses import dataclass, replace
from typing import Any, Callable

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from repobot import settings_store
from repobot.formatter import content_response, issue_response, repository_response, user_response
from repobot.github_client import GitHubClient
from repobot.logger import logger
from repobot.options import (
    FileOptions,
    NoOptions,
    OptionError,
    PrOptions,
    RepoOptions,
    SetDefaultRepoOptions,
    SetQuickRefOptions,
    UserOptions,
    parse_file,
    parse_no_options,
    parse_pr,
    parse_repo,
    parse_set_default_repo,
    parse_set_quick_ref,
    parse_user,
)
from repobot.repository import invalid_repository_message, parse_repository, resolve_repository
from repobot.responses import Field, StructuredResponse, failure, message
from repobot.settings_store import ServerSettings
from repobot.utils import get_mongodb_error_message


@dataclass
class RequestContext:
    server_id: str | None
    github: GitHubClient
    can_manage_server: Callable[[], bool]
    server_name: str | None = None
    user_id: str | None = None
    settings: ServerSettings | None = None
    settings_error: Exception | None = None
    collection: Collection | None = None

    def repository(self, explicit: str | None) -> str:
        return resolve_repository(explicit, self.server_id, lookup=lambda server_id: self.settings)


@dataclass(frozen=True)
class Reply:
    response: StructuredResponse
    ephemeral: bool = False


@dataclass(frozen=True)
class Command:
    parse: Callable[[str], Any]
    handler: Callable[[Any, RequestContext], Reply]
    requires_manage_server: bool = False
    denial: str = ""


def build_context(
    server_id: str | None,
    github: GitHubClient,
    can_manage_server: Callable[[], bool],
    server_name: str | None = None,
    user_id: str | None = None,
    collection: Collection | None = None,
) -> RequestContext:
    """
    Load the server's settings once for the request. A failed lookup is kept
    on the context rather than raised.
    """
    settings = None
    settings_error = None
    if server_id:
        try:
            settings = settings_store.find_settings(server_id, collection=collection)
        except (PyMongoError, ValueError) as e:
            logger.warning("Could not load settings for server_id=%s: %s", server_id, e, exc_info=e)
            settings_error = e
    return RequestContext(
        server_id=server_id,
        github=github,
        can_manage_server=can_manage_server,
        server_name=server_name,
        user_id=user_id,
        settings=settings,
        settings_error=settings_error,
        collection=collection,
    )


def handle_ping(options: NoOptions, context: RequestContext) -> Reply:
    return Reply(message("Pong!"), ephemeral=True)


def handle_set_default_repo(options: SetDefaultRepoOptions, context: RequestContext) -> Reply:
    ref = parse_repository(options.repository)
    if ref is None:
        return Reply(failure(invalid_repository_message(options.repository)), ephemeral=True)
    try:
        settings_store.set_default_repo(context.server_id, ref.full_name, collection=context.collection)
    except PyMongoError as e:
        return Reply(failure(f"Failed to set default repository: {get_mongodb_error_message(e, 'set_default_repo')}"))
    except ValueError as e:
        logger.error("Invalid server id for set-default-repo: %s", e)
        return Reply(failure("Failed to set default repository: this command only works inside a workspace."))
    return Reply(message(f"Default repository set to *{ref.full_name}*."))


def handle_set_quick_ref(options: SetQuickRefOptions, context: RequestContext) -> Reply:
    try:
        settings_store.set_quick_ref(context.server_id, options.enable, collection=context.collection)
    except PyMongoError as e:
        return Reply(failure(f"Failed to set quick reference: {get_mongodb_error_message(e, 'set_quick_ref')}"))
    except ValueError as e:
        logger.error("Invalid server id for set-quick-ref: %s", e)
        return Reply(failure("Failed to set quick reference: this command only works inside a workspace."))
    state = "enabled" if options.enable else "disabled"
    return Reply(message(f"Quick reference *{state}*."))


def handle_get_settings(options: NoOptions, context: RequestContext) -> Reply:
    if context.settings_error is not None:
        error_text = get_mongodb_error_message(context.settings_error, "get_settings", log=False)
        return Reply(failure(f"Failed to get settings: {error_text}"))
    settings = context.settings
    if settings is None:
        return Reply(message("No settings found for this server."))
    response = StructuredResponse(
        title=f"Server Settings for {context.server_name or context.server_id}",
        description=f"_Server ID: {settings.server_id}_",
    ).with_fields(
        Field(
            name="Default Repository",
            value=f"_<https://github.com/{settings.default_repo}|{settings.default_repo}>_",
        ),
        Field(name="Quick Reference", value="_Yes_" if settings.quick_ref_enabled else "_No_"),
    )
    return Reply(response)


def handle_user(options: UserOptions, context: RequestContext) -> Reply:
    return Reply(user_response(context.github, options.username, options.show_repositories))


def handle_repo(options: RepoOptions, context: RequestContext) -> Reply:
    return Reply(repository_response(context.github, context.repository(options.repository)))


def handle_file(options: FileOptions, context: RequestContext) -> Reply:
    return Reply(content_response(context.github, context.repository(options.repository), options.file_path))


def handle_pr(options: PrOptions, context: RequestContext) -> Reply:
    return Reply(issue_response(context.github, context.repository(options.repository), options.pr_issue_number))


COMMANDS: dict[str, Command] = {
    "ping": Command(parse_no_options, handle_ping),
    "set-default-repo": Command(
        parse_set_default_repo,
        handle_set_default_repo,
        requires_manage_server=True,
        denial="You need to be a workspace admin to set the default repository.",
    ),
    "set-quick-ref": Command(
        parse_set_quick_ref,
        handle_set_quick_ref,
        requires_manage_server=True,
        denial="You need to be a workspace admin to set quick references.",
    ),
    "get-settings": Command(parse_no_options, handle_get_settings),
    "user": Command(parse_user, handle_user),
    "repo": Command(parse_repo, handle_repo),
    "file": Command(parse_file, handle_file),
    "pr": Command(parse_pr, handle_pr),
}


def dispatch(command_name: str, text: str | None, context: RequestContext) -> Reply:
    started = time.monotonic()
    name = command_name.lstrip("/")
    command = COMMANDS.get(name)
    if command is None:
        logger.error(f"Failed to recognise the command: {command_name}")
        reply = Reply(failure(f"Unknown command: {command_name}"), ephemeral=True)
    else:
        reply = _run(name, command, text or "", context)

    latency_ms = int((time.monotonic() - started) * 1000)
    return replace(reply, response=reply.response.with_footer(f"Latency: {latency_ms}ms"))


def _run(name: str, command: Command, text: str, context: RequestContext) -> Reply:
    if command.requires_manage_server and not context.can_manage_server():
        logger.info("Denied %s for user_id=%s in server_id=%s", name, context.user_id, context.server_id)
        return Reply(failure(command.denial), ephemeral=True)

    try:
        options = command.parse(text)
    except OptionError as e:
        return Reply(failure(e.usage), ephemeral=True)

    logger.debug("Dispatching %s with %s for server_id=%s", name, options, context.server_id)
    return command.handler(options, context)
