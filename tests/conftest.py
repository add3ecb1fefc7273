from unittest.mock import MagicMock

import pytest

from repobot.github_client import GitHubClient


class FakeCollection:
    """In-memory stand-in for the server_config collection."""

    def __init__(self, documents=None):
        self.documents = {doc["serverId"]: dict(doc) for doc in (documents or [])}
        self.updates = []

    def find_one(self, query):
        document = self.documents.get(query["serverId"])
        return dict(document) if document else None

    def update_one(self, query, update, upsert=False):
        self.updates.append((query, update, upsert))
        server_id = query["serverId"]
        document = self.documents.get(server_id)
        if document is None:
            if not upsert:
                return
            document = {**query, **update.get("$setOnInsert", {})}
            self.documents[server_id] = document
        document.update(update.get("$set", {}))


@pytest.fixture(autouse=True)
def no_process_default(monkeypatch):
    monkeypatch.delenv("DEFAULT_REPO", raising=False)


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def github():
    return MagicMock(spec=GitHubClient)
