from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

from app.models.annotation import NAME_MAX_LENGTH

# Fields a client may set; everything else is owned by the server
MUTABLE_FIELDS = ("name", "x", "y", "width", "height", "fill", "stroke", "stroke_width")
NUMERIC_FIELDS = ("x", "y", "width", "height", "stroke_width")


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _reject_bool(value, info):
    # JSON true/false would otherwise coerce to 1.0/0.0
    if isinstance(value, bool):
        raise ValueError(f"{info.field_name} must be a number")
    return value


class AnnotationCreate(BaseModel):
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)
    x: float
    y: float
    width: float = Field(..., ge=1)
    height: float = Field(..., ge=1)
    # None means "use the column default"
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None

    # Accept camelCase from the frontend, ignore ownerId/id/timestamps
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"
        allow_inf_nan = False

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def reject_bool(cls, value, info):
        return _reject_bool(value, info)


class AnnotationUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = Field(None, ge=1)
    height: Optional[float] = Field(None, ge=1)
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"
        allow_inf_nan = False

    # Only runs for keys present in the body; absent keys stay unset
    @field_validator(*MUTABLE_FIELDS, mode="before")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def reject_bool(cls, value, info):
        return _reject_bool(value, info)


# Properties to return to the client
class Annotation(BaseModel):
    id: str
    owner_id: str
    name: str
    x: float
    y: float
    width: float
    height: float
    fill: str
    stroke: str
    stroke_width: float
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

    # Same JSON timestamps on SQLite and PostgreSQL
    @field_validator("created_at", "updated_at")
    @classmethod
    def normalise_timezone(cls, value: datetime) -> datetime:
        return as_utc(value)


def field_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into ``{field, message, type}`` entries."""
    flattened = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        flattened.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        })
    return flattened
