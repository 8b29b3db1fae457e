from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, WithJsonSchema


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_object_id(v: Any) -> ObjectId:
    if isinstance(v, ObjectId):
        return v
    if isinstance(v, str) and ObjectId.is_valid(v):
        return ObjectId(v)
    raise ValueError(f"Invalid ObjectId: {v!r}")


def validate_object_id(v: Any) -> Optional[ObjectId]:
    """Accept an ObjectId or its 24-char hex form; keep None as None."""
    return None if v is None else _coerce_object_id(v)


def validate_object_id_str(v: Any) -> Optional[str]:
    return None if v is None else str(_coerce_object_id(v))


# Stored as ObjectId, rendered as its hex string in JSON
PyObjectId = Annotated[
    ObjectId,
    BeforeValidator(validate_object_id),
    PlainSerializer(str, return_type=str, when_used="json"),
    WithJsonSchema({"type": "string"}, mode="serialization"),
]

# Response-side id: always a hex string
PyObjectIdStr = Annotated[str, BeforeValidator(validate_object_id_str)]


class MongoModel(BaseModel):
    """Any model, embedded or top-level, that may hold raw ObjectId values."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)


class BaseEntity(MongoModel):
    """A document with its own ``_id`` and storefront timestamps."""

    id: Optional[PyObjectId] = Field(None, alias="_id")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def mark_updated(self):
        self.updated_at = utcnow()
        return self
