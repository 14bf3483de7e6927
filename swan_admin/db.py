from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from swan_admin.config import Config
from swan_admin.models.collection_types import Collection

# Global client instance for connection pooling
_current_client = None


def get_client() -> MongoClient:
    """
    Returns a MongoClient pointed at the current ENVIRONMENT db.

    The client is created on first use and reused afterwards.
    """
    global _current_client

    if _current_client is None:
        options = {"server_api": ServerApi("1")}
        if Config.MONGO_TLS_ALLOW_INVALID:
            options.update(tls=True, tlsAllowInvalidCertificates=True)
        _current_client = MongoClient(Config.get_current_uri(), **options)
    return _current_client


def close_client() -> None:
    global _current_client

    if _current_client is not None:
        _current_client.close()
        _current_client = None


def get_collection(collection: Collection):
    db = get_client().get_default_database()
    return db[collection.value]
