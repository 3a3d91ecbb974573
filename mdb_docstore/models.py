"""
Base model for typed documents.

Subclass :class:`Document` to declare a collection's document shape:

    class User(Document):
        name: str

    await create_document(users, User(id="1", name="Ann"))

The ``id`` attribute is stored under MongoDB's ``_id`` key. Leave it unset
to have a new ObjectId string assigned on create.
"""

from pydantic import BaseModel, ConfigDict, Field

from .constants import ID_FIELD


class Document(BaseModel):
    """A stored document with an optional string primary key."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str | None = Field(default=None, alias=ID_FIELD)
