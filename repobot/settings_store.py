"""
Per-server settings persistence.

One document per Slack workspace in the server_config collection:
{serverId, defaultRepo, quickRefEnabled}. Both setters upsert and fill the
other field with its default only when the document is being created.
"""
from dataclasses import dataclass

from pymongo.collection import Collection

from repobot.constants import FALLBACK_REPO
from repobot.db import get_server_config
from repobot.logger import logger
from repobot.utils import sanitize_slack_id


@dataclass(frozen=True)
class ServerSettings:
    server_id: str
    default_repo: str
    quick_ref_enabled: bool = False

    @classmethod
    def from_document(cls, document: dict) -> "ServerSettings":
        return cls(
            server_id=document["serverId"],
            default_repo=document.get("defaultRepo") or FALLBACK_REPO,
            quick_ref_enabled=bool(document.get("quickRefEnabled", False)),
        )


def _collection(collection: Collection | None) -> Collection:
    return collection if collection is not None else get_server_config()


def find_settings(server_id: str, collection: Collection | None = None) -> ServerSettings | None:
    """
    Fetch the settings record for a server, or None if the server has none.
    Store errors propagate; callers decide whether to degrade or report.
    """
    server_id = sanitize_slack_id(server_id, "server_id")
    document = _collection(collection).find_one({"serverId": server_id})
    if not document:
        logger.debug("No settings stored for server_id=%s", server_id)
        return None
    return ServerSettings.from_document(document)


def set_default_repo(server_id: str, default_repo: str, collection: Collection | None = None) -> None:
    server_id = sanitize_slack_id(server_id, "server_id")
    logger.info("Setting default repository for server_id=%s to %s", server_id, default_repo)
    _collection(collection).update_one(
        {"serverId": server_id},
        {
            "$set": {"serverId": server_id, "defaultRepo": default_repo},
            "$setOnInsert": {"quickRefEnabled": False},
        },
        upsert=True,
    )


def set_quick_ref(server_id: str, enabled: bool, collection: Collection | None = None) -> None:
    server_id = sanitize_slack_id(server_id, "server_id")
    logger.info("Setting quick reference for server_id=%s to %s", server_id, enabled)
    _collection(collection).update_one(
        {"serverId": server_id},
        {
            "$set": {"serverId": server_id, "quickRefEnabled": enabled},
            "$setOnInsert": {"defaultRepo": FALLBACK_REPO},
        },
        upsert=True,
    )
