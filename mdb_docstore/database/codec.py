"""
Conversion between caller document shapes and driver documents.

Two shapes are supported: pydantic models and plain mappings. Models are
dumped by alias so that :class:`~mdb_docstore.models.Document` subclasses
land their ``id`` on ``_id``; mappings are passed through as-is.
"""

from collections.abc import Mapping
from typing import Any, TypeVar, get_origin, is_typeddict

from bson import ObjectId
from pydantic import BaseModel

from ..constants import ID_FIELD
from ..exceptions import DocumentShapeError

T = TypeVar("T")


def _resolve(document_type: Any) -> Any:
    # dict[str, Any] and friends resolve to their runtime class
    return get_origin(document_type) or document_type


def is_model_type(document_type: Any) -> bool:
    resolved = _resolve(document_type)
    return isinstance(resolved, type) and issubclass(resolved, BaseModel)


def is_mapping_type(document_type: Any) -> bool:
    resolved = _resolve(document_type)
    return isinstance(resolved, type) and issubclass(resolved, Mapping)


def validate_document_type(document_type: Any) -> None:
    """
    Ensure ``document_type`` is a shape this package can store.

    Raises:
        DocumentShapeError: If it is neither a pydantic model nor a mapping type
    """
    if not (is_model_type(document_type) or is_mapping_type(document_type)):
        raise DocumentShapeError(
            "Document type must be a pydantic model or a mapping type",
            document_type=getattr(document_type, "__name__", repr(document_type)),
        )


def encode_document(document: Any, assign_id: bool = False) -> dict[str, Any]:
    """
    Convert ``document`` into the dict handed to the driver.

    An ``_id`` of ``None`` is dropped so that the driver assigns an ObjectId.
    With ``assign_id`` a model without an identifier instead gets a fresh
    ObjectId rendered as a string, so the key stored matches the ``id`` the
    model exposes when read back.

    Raises:
        DocumentShapeError: If ``document`` is neither a model nor a mapping
    """
    if isinstance(document, BaseModel):
        data = document.model_dump(by_alias=True)
        if assign_id and data.get(ID_FIELD) is None:
            data[ID_FIELD] = str(ObjectId())
    elif isinstance(document, Mapping):
        data = dict(document)
    else:
        raise DocumentShapeError(
            "Cannot store document of unsupported type",
            document_type=type(document).__name__,
        )

    if data.get(ID_FIELD) is None:
        data.pop(ID_FIELD, None)
    return data


def decode_document(raw: Mapping[str, Any] | None, document_type: type[T]) -> T | None:
    """
    Build a ``document_type`` value from a driver document.

    Model shapes get an ``ObjectId`` key rendered as its hex string;
    mapping shapes (TypedDicts included) receive the driver's values
    untouched. Validation errors from pydantic propagate to the caller.
    """
    if raw is None:
        return None

    if is_model_type(document_type):
        data = dict(raw)
        if isinstance(data.get(ID_FIELD), ObjectId):
            data[ID_FIELD] = str(data[ID_FIELD])
        return _resolve(document_type).model_validate(data)

    resolved = _resolve(document_type)
    if is_typeddict(resolved):
        # TypedDicts refuse isinstance checks and are plain dicts at runtime
        return dict(raw)  # type: ignore[return-value]
    if isinstance(raw, resolved):
        return raw  # type: ignore[return-value]
    return resolved(raw)


def document_id(encoded: Mapping[str, Any]) -> Any | None:
    """Return the primary key of an encoded document, or ``None``."""
    return encoded.get(ID_FIELD)
