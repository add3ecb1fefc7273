"""
Typed options for each slash command, parsed from the text Slack sends after
the command name.
"""
from dataclasses import dataclass

from repobot.constants import FILE_PATH_SUGGESTIONS

TRUE_WORDS = {"true", "yes", "on", "enable", "enabled", "1"}
FALSE_WORDS = {"false", "no", "off", "disable", "disabled", "0"}


class OptionError(ValueError):
    """Raised when command text does not match the command's options."""

    def __init__(self, usage: str) -> None:
        self.usage = usage
        super().__init__(usage)


@dataclass(frozen=True)
class NoOptions:
    pass


@dataclass(frozen=True)
class SetDefaultRepoOptions:
    repository: str


@dataclass(frozen=True)
class SetQuickRefOptions:
    enable: bool


@dataclass(frozen=True)
class UserOptions:
    username: str
    show_repositories: bool = False


@dataclass(frozen=True)
class RepoOptions:
    repository: str | None = None


@dataclass(frozen=True)
class FileOptions:
    file_path: str
    repository: str | None = None


@dataclass(frozen=True)
class PrOptions:
    pr_issue_number: int
    repository: str | None = None


def parse_bool(word: str) -> bool | None:
    lowered = word.strip().lower()
    if lowered in TRUE_WORDS:
        return True
    if lowered in FALSE_WORDS:
        return False
    return None


def parse_no_options(text: str) -> NoOptions:
    return NoOptions()


def parse_set_default_repo(text: str) -> SetDefaultRepoOptions:
    tokens = text.split()
    if len(tokens) != 1:
        raise OptionError("Usage: `/set-default-repo owner/repo`")
    return SetDefaultRepoOptions(repository=tokens[0])


def parse_set_quick_ref(text: str) -> SetQuickRefOptions:
    tokens = text.split()
    enable = parse_bool(tokens[0]) if len(tokens) == 1 else None
    if enable is None:
        raise OptionError("Usage: `/set-quick-ref true|false`")
    return SetQuickRefOptions(enable=enable)


def parse_user(text: str) -> UserOptions:
    usage = "Usage: `/user username [show-repositories]`"
    tokens = text.split()
    if not tokens or len(tokens) > 2:
        raise OptionError(usage)
    show_repositories = False
    if len(tokens) == 2:
        flag = tokens[1].lower()
        if flag in {"show-repositories", "repos", "repositories"}:
            show_repositories = True
        else:
            show_repositories = parse_bool(flag)
            if show_repositories is None:
                raise OptionError(usage)
    return UserOptions(username=tokens[0].lstrip("@"), show_repositories=show_repositories)


def parse_repo(text: str) -> RepoOptions:
    tokens = text.split()
    if len(tokens) > 1:
        raise OptionError("Usage: `/repo [owner/repo]`")
    return RepoOptions(repository=tokens[0] if tokens else None)


def parse_file(text: str) -> FileOptions:
    tokens = text.split()
    if not tokens or len(tokens) > 2:
        suggestions = ", ".join(f"`{value}` ({name})" for name, value in FILE_PATH_SUGGESTIONS.items())
        raise OptionError(f"Usage: `/file path [owner/repo]`. Try: {suggestions}")
    return FileOptions(file_path=tokens[0], repository=tokens[1] if len(tokens) == 2 else None)


def parse_pr(text: str) -> PrOptions:
    usage = "Usage: `/pr number [owner/repo]`"
    tokens = text.split()
    if not tokens or len(tokens) > 2:
        raise OptionError(usage)
    number = tokens[0].lstrip("#")
    if not (number.isascii() and number.isdigit()):
        raise OptionError(usage)
    return PrOptions(pr_issue_number=int(number), repository=tokens[1] if len(tokens) == 2 else None)
