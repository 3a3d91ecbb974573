"""
Database layer.

Client lifecycle helpers and the async document facade over Motor.
"""

from .codec import decode_document, encode_document
from .connection import close_mongo_client, create_mongo_client, verify_client
from .documents import (
    DocumentCollection,
    create_document,
    create_document_in,
    get_all,
    get_collection_with_id,
    get_document,
    list_root_collection_ids,
    update_document,
)

__all__ = [
    # Connection
    "create_mongo_client",
    "verify_client",
    "close_mongo_client",
    # Documents
    "DocumentCollection",
    "get_collection_with_id",
    "list_root_collection_ids",
    "create_document",
    "create_document_in",
    "get_all",
    "get_document",
    "update_document",
    # Codec
    "encode_document",
    "decode_document",
]
