import os

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import CollectionInvalid, ConnectionFailure, ConfigurationError, PyMongoError

from repobot.constants import (
    MONGODB_DATABASE,
    MONGODB_SERVER_SELECTION_TIMEOUT_MS,
    SERVER_CONFIG_COLLECTION,
)
from repobot.logger import logger

SERVER_CONFIG_SCHEMA = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["serverId", "defaultRepo", "quickRefEnabled"],
        "properties": {
            "serverId": {"bsonType": "string"},
            "defaultRepo": {"bsonType": "string", "minLength": 3},
            "quickRefEnabled": {"bsonType": "bool"},
        },
    }
}

_server_config: Collection | None = None


def ensure_server_config_collection(db: Database) -> Collection:
    """
    Create the server_config collection with its schema validator and a unique
    index on serverId. Existing collections are left as they are.
    """
    try:
        db.create_collection(SERVER_CONFIG_COLLECTION, validator=SERVER_CONFIG_SCHEMA)
        logger.info("Created %s collection", SERVER_CONFIG_COLLECTION)
    except CollectionInvalid:
        logger.debug("%s collection already exists", SERVER_CONFIG_COLLECTION)

    collection = db[SERVER_CONFIG_COLLECTION]
    try:
        collection.create_index("serverId", unique=True)
        logger.debug("server_config collection index created/verified")
    except PyMongoError as e:
        logger.warning("Could not create index on server_config collection: %s", e)
    return collection


def get_server_config() -> Collection:
    """
    Return the server_config collection, connecting on first use.
    """
    global _server_config
    if _server_config is not None:
        return _server_config

    try:
        mongo_url = os.environ.get("MONGO_URL")
        if not mongo_url:
            raise ValueError("MONGO_URL environment variable is not set")

        client = MongoClient(mongo_url, serverSelectionTimeoutMS=MONGODB_SERVER_SELECTION_TIMEOUT_MS)
        # Test the connection
        client.admin.command('ping')
        _server_config = ensure_server_config_collection(client[MONGODB_DATABASE])
        logger.info("MongoDB connection established successfully")
        return _server_config
    except (ConnectionFailure, ConfigurationError, ValueError) as e:
        logger.critical("Failed to connect to MongoDB: %s", e)
        raise
