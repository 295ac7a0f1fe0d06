from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Dict, Optional


# Lower-cased JSON key -> canonical key. Incoming bodies are matched
# case-insensitively, so "title" and "TITLE" both land on "Title".
_CANONICAL_KEYS = {"id": "ID", "title": "Title", "description": "Description"}


def _canonicalize_keys(data: Any) -> Any:
    # A JSON null body decodes to an empty model.
    if data is None:
        return {}
    if not isinstance(data, dict):
        return data
    return {_CANONICAL_KEYS.get(str(k).lower(), k): v for k, v in data.items()}


class Event(BaseModel):
    """A stored event as clients see it.

    `ID` is caller supplied and opaque; it is not the item key and is not
    unique. Empty strings are treated as absent, so they are neither written
    to the table nor echoed back.
    """

    id: Optional[str] = Field(default=None, alias="ID")
    title: Optional[str] = Field(default=None, alias="Title")
    description: Optional[str] = Field(default=None, alias="Description")

    class Config:
        populate_by_name = True

    @model_validator(mode="before")
    @classmethod
    def canonical_keys(cls, data: Any) -> Any:
        return _canonicalize_keys(data)

    @field_validator("id", "title", "description")
    @classmethod
    def empty_as_absent(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    def to_item(self) -> Dict[str, str]:
        """Attributes to write, keyed the way they are stored."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EventPatch(BaseModel):
    """Request body for PATCH /events/{id}.

    Both fields are always written; a missing field overwrites with "".
    """

    title: str = Field(default="", alias="Title")
    description: str = Field(default="", alias="Description")

    class Config:
        populate_by_name = True

    @model_validator(mode="before")
    @classmethod
    def canonical_keys(cls, data: Any) -> Any:
        return _canonicalize_keys(data)

    @field_validator("title", "description", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class UpdatedEvent(BaseModel):
    """Post-update item returned by the upsert, including its record identity"""

    record_id: str = Field(alias="_id")
    id: Optional[str] = Field(default=None, alias="ID")
    title: Optional[str] = Field(default=None, alias="Title")
    description: Optional[str] = Field(default=None, alias="Description")

    class Config:
        populate_by_name = True


class InsertResult(BaseModel):
    inserted_id: str = Field(alias="InsertedID")

    class Config:
        populate_by_name = True


class DeleteResult(BaseModel):
    deleted_count: int = Field(alias="DeletedCount")

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    """Body of every 500 response"""

    message: str
