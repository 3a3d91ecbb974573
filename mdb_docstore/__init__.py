"""
MDB_DOCSTORE - async document store helpers for MongoDB

Thin coroutine wrappers over Motor for creating, reading, updating and
listing documents and collections.
"""

from .config import StoreConfig
from .database import (
    DocumentCollection,
    close_mongo_client,
    create_document,
    create_document_in,
    create_mongo_client,
    get_all,
    get_collection_with_id,
    get_document,
    list_root_collection_ids,
    update_document,
    verify_client,
)
from .exceptions import ConfigurationError, DocumentShapeError, DocumentStoreError
from .models import Document

__version__ = "0.1.0"

__all__ = [
    # Client
    "create_mongo_client",
    "verify_client",
    "close_mongo_client",
    "StoreConfig",
    # Documents
    "Document",
    "DocumentCollection",
    "get_collection_with_id",
    "list_root_collection_ids",
    "create_document",
    "create_document_in",
    "get_all",
    "get_document",
    "update_document",
    # Errors
    "DocumentStoreError",
    "ConfigurationError",
    "DocumentShapeError",
]
