"""
Document Store Access Facade

Async helpers over a Motor database and its collections. Each helper awaits
exactly one driver call; Motor runs that call on its I/O thread pool so the
event loop is never blocked. Driver errors propagate unchanged and writes
report the store's acknowledgement flag.

Usage:
    from mdb_docstore.database import (
        create_mongo_client, get_collection_with_id, create_document,
        get_document, update_document,
    )
    from mdb_docstore.models import Document

    class User(Document):
        name: str

    client = create_mongo_client()
    users = get_collection_with_id(client["testdb"], "users", User)

    await create_document(users, User(id="1", name="Ann"))   # True
    await get_document(users, "1")                           # User(id="1", name="Ann")
    await update_document(users, User(id="1", name="Bob"))   # True
"""

from collections.abc import AsyncIterator
from typing import Any, Generic, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

from ..constants import ID_FIELD
from ..exceptions import DocumentShapeError
from ..observability import get_logger, store_context, timed_operation
from .codec import decode_document, document_id, encode_document, validate_document_type

logger = get_logger(__name__)

T = TypeVar("T")


class DocumentCollection(Generic[T]):
    """
    A Motor collection paired with the shape of its documents.

    Instances are cheap views; build them with :func:`get_collection_with_id`
    whenever needed rather than caching them.
    """

    def __init__(self, collection: AsyncIOMotorCollection, document_type: type[T]):
        self._collection = collection
        self._document_type = document_type

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """The underlying Motor collection."""
        return self._collection

    @property
    def document_type(self) -> type[T]:
        return self._document_type

    @property
    def name(self) -> str:
        return self._collection.name

    @property
    def database_name(self) -> str:
        return self._collection.database.name

    def __repr__(self) -> str:
        type_name = getattr(self._document_type, "__name__", repr(self._document_type))
        return f"DocumentCollection(name={self.name!r}, document_type={type_name})"


def get_collection_with_id(
    database: AsyncIOMotorDatabase,
    collection_id: str,
    document_type: type[T] = dict,  # type: ignore[assignment]
) -> DocumentCollection[T]:
    """
    Get the collection ``collection_id`` of ``database``, typed by ``document_type``.

    Pure lookup: the collection is not required to exist, MongoDB creates it
    on first write.

    Raises:
        DocumentShapeError: If ``document_type`` is not a pydantic model or mapping type
    """
    validate_document_type(document_type)
    return DocumentCollection(database.get_collection(collection_id), document_type)


@timed_operation("database.list_collections")
async def list_root_collection_ids(database: AsyncIOMotorDatabase) -> list[str]:
    """
    Names of all collections at the root of ``database``, in store order.
    """
    with store_context(database=database.name):
        return await database.list_collection_names()


@timed_operation("documents.create")
async def create_document(collection: DocumentCollection[T], document: T) -> bool:
    """
    Insert ``document`` into ``collection``.

    If the document carries an identifier it becomes the primary key,
    otherwise a new ObjectId is used. Model documents get that ObjectId as
    a string, the form their ``id`` is read back in, so they can later be
    fetched and updated by it. The generated identifier is not returned.

    Returns:
        Whether the store acknowledged the write
    """
    encoded = encode_document(document, assign_id=True)
    with store_context(database=collection.database_name, collection=collection.name):
        result = await collection.collection.insert_one(encoded)
        logger.debug(f"Inserted document into '{collection.name}'")
    return result.acknowledged


async def create_document_in(
    database: AsyncIOMotorDatabase, parent_collection_id: str, document: Any
) -> bool:
    """
    Insert ``document`` into the collection ``parent_collection_id`` of ``database``.

    The collection is typed by the document's own class.

    Returns:
        Whether the store acknowledged the write
    """
    collection = get_collection_with_id(database, parent_collection_id, type(document))
    return await create_document(collection, document)


async def get_all(collection: DocumentCollection[T]) -> AsyncIterator[T]:
    """
    Iterate over every document in ``collection``.

    The cursor is opened lazily on first iteration and batches are fetched as
    the caller consumes them.

    Example:
        async for user in get_all(users):
            ...
    """
    async for raw in collection.collection.find():
        yield decode_document(raw, collection.document_type)


@timed_operation("documents.get")
async def get_document(collection: DocumentCollection[T], document_id: str) -> T | None:
    """
    Get the document of ``collection`` whose primary key is ``document_id``.

    Returns:
        The document, or None if no document has that identifier
    """
    with store_context(database=collection.database_name, collection=collection.name):
        raw = await collection.collection.find_one({ID_FIELD: document_id})
    return decode_document(raw, collection.document_type)


@timed_operation("documents.update")
async def update_document(collection: DocumentCollection[T], document: T) -> bool:
    """
    Replace the stored document that has ``document``'s identifier.

    The whole document is replaced; fields missing from ``document`` are not
    kept. If no document has that identifier it is created.

    Returns:
        Whether the store acknowledged the write

    Raises:
        DocumentShapeError: If ``document`` carries no identifier
    """
    encoded = encode_document(document)
    key = document_id(encoded)
    if key is None:
        raise DocumentShapeError(
            "Document must carry an identifier to be updated",
            document_type=type(document).__name__,
            operation="update_document",
        )

    with store_context(database=collection.database_name, collection=collection.name):
        result = await collection.collection.replace_one({ID_FIELD: key}, encoded, upsert=True)
        logger.debug(f"Replaced document '{key}' in '{collection.name}'")
    return result.acknowledged
