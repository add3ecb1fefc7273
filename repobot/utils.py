import re
from datetime import datetime

from pymongo.errors import (
    ConnectionFailure,
    OperationFailure,
    PyMongoError,
    ServerSelectionTimeoutError,
)

from repobot.logger import logger

SLACK_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
MAX_ID_LENGTH = 256


def sanitize_slack_id(identifier: str | None, name: str = "identifier") -> str:
    """
    Validate a Slack ID (team_id, user_id) before it is used as a MongoDB key.

    Slack IDs are alphanumeric; anything carrying operator syntax such as
    "$ne" or "{...}" is rejected along with any other punctuation.

    Raises:
        ValueError: If the identifier is missing, too long or malformed
    """
    if not isinstance(identifier, str):
        raise ValueError(f"{name} must be a string, got {type(identifier).__name__}")

    identifier = identifier.strip()
    if not identifier:
        raise ValueError(f"{name} cannot be empty")

    if len(identifier) > MAX_ID_LENGTH:
        raise ValueError(f"{name} is too long (max {MAX_ID_LENGTH} characters): {len(identifier)}")

    if not SLACK_ID_PATTERN.match(identifier):
        raise ValueError(
            f"{name} may only contain letters, digits, hyphens and underscores: {identifier!r}"
        )

    return identifier


def get_mongodb_error_message(error: Exception, operation_name: str = "operation", log: bool = True) -> str:
    """
    Turn a settings-store error into the text shown to the user.

    Set log=False when the error was already logged where it was caught.
    """
    if log:
        logger.exception("MongoDB error in %s: %s", operation_name, error)

    if isinstance(error, (ConnectionFailure, ServerSelectionTimeoutError)):
        return "I'm having trouble connecting to the database. Please try again in a moment."
    if isinstance(error, OperationFailure):
        return "A database operation failed. Please try again or contact support if the issue persists."
    if isinstance(error, PyMongoError):
        return "A database error occurred. Please try again in a moment."
    return "The server settings could not be read. Please try again in a moment."


def format_date(date_str: str | None) -> str:
    """Format ISO date string to date only (without time)"""
    try:
        if isinstance(date_str, str):
            # Parse ISO format with or without Z
            if date_str.endswith('Z'):
                date_str = date_str[:-1]
            dt = datetime.fromisoformat(date_str)
            return dt.strftime("%Y-%m-%d")
        return "N/A"
    except ValueError:
        return "N/A"


def file_extension(path: str) -> str:
    """Text after the last '.' of the path's final segment, lowercased ('' if none)."""
    name = path.rstrip("/").rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()
