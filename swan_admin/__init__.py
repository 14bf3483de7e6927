from swan_admin.config import Config, ConfigurationError
from swan_admin.db import get_client, get_collection, close_client
from swan_admin.models.collection_types import Collection

__all__ = [
    "Config",
    "ConfigurationError",
    "Collection",
    "get_client",
    "get_collection",
    "close_client",
]
