from unittest.mock import MagicMock

import pytest

from repobot.constants import FALLBACK_REPO
from repobot.settings_store import ServerSettings, find_settings, set_default_repo, set_quick_ref
from tests.conftest import FakeCollection


def test_set_default_repo_upserts_with_insert_only_default():
    collection = MagicMock()
    set_default_repo("T1", "a/b", collection=collection)
    collection.update_one.assert_called_once_with(
        {"serverId": "T1"},
        {"$set": {"serverId": "T1", "defaultRepo": "a/b"}, "$setOnInsert": {"quickRefEnabled": False}},
        upsert=True,
    )


def test_set_quick_ref_upserts_with_insert_only_default():
    collection = MagicMock()
    set_quick_ref("T1", True, collection=collection)
    collection.update_one.assert_called_once_with(
        {"serverId": "T1"},
        {"$set": {"serverId": "T1", "quickRefEnabled": True}, "$setOnInsert": {"defaultRepo": FALLBACK_REPO}},
        upsert=True,
    )


def test_fields_are_independently_settable():
    collection = FakeCollection()
    set_quick_ref("T1", True, collection=collection)
    set_default_repo("T1", "a/b", collection=collection)
    assert find_settings("T1", collection=collection) == ServerSettings("T1", "a/b", True)


def test_find_settings_missing_record():
    assert find_settings("T1", collection=FakeCollection()) is None


def test_server_id_injection_is_rejected():
    collection = MagicMock()
    with pytest.raises(ValueError):
        set_default_repo("{$ne: 1}", "a/b", collection=collection)
    collection.update_one.assert_not_called()
