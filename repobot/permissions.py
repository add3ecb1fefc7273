"""
Server-management capability: on Slack, workspace admins and owners.
"""
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from repobot.logger import logger


def can_manage_server(client: WebClient, user_id: str) -> bool:
    try:
        info = client.users_info(user=user_id)
    except SlackApiError as e:
        logger.warning("Could not look up user_id=%s for permission check: %s", user_id, e)
        return False
    user = info.get("user") or {}
    return bool(user.get("is_admin") or user.get("is_owner") or user.get("is_primary_owner"))
