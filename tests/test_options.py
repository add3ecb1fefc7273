import pytest

from repobot.options import (
    FileOptions,
    OptionError,
    PrOptions,
    RepoOptions,
    UserOptions,
    parse_file,
    parse_pr,
    parse_repo,
    parse_set_default_repo,
    parse_set_quick_ref,
    parse_user,
)


def test_user_options():
    assert parse_user("octocat") == UserOptions("octocat", False)
    assert parse_user("@octocat show-repositories") == UserOptions("octocat", True)
    assert parse_user("octocat false") == UserOptions("octocat", False)
    with pytest.raises(OptionError):
        parse_user("")
    with pytest.raises(OptionError):
        parse_user("octocat maybe")


def test_pr_options():
    assert parse_pr("#12") == PrOptions(12, None)
    assert parse_pr("12 octocat/hello-world") == PrOptions(12, "octocat/hello-world")
    with pytest.raises(OptionError):
        parse_pr("twelve")


def test_file_options_mention_suggestions():
    assert parse_file("README.md") == FileOptions("README.md", None)
    assert parse_file(". octocat/hello-world") == FileOptions(".", "octocat/hello-world")
    with pytest.raises(OptionError) as excinfo:
        parse_file("")
    assert "`LICENSE`" in excinfo.value.usage


def test_repo_and_settings_options():
    assert parse_repo("") == RepoOptions(None)
    assert parse_set_default_repo("octocat/hello-world").repository == "octocat/hello-world"
    assert parse_set_quick_ref("on").enable is True
    assert parse_set_quick_ref("Disable").enable is False
    with pytest.raises(OptionError):
        parse_set_quick_ref("")
