"""Schema models for store types and streams.

Models for:
- TypeProperty: One typed field of a schema
- SchemaType: A versioned, registered schema ("type")
- Stream: A time-indexed collection bound to a type

All models use:
- Pydantic for strict validation
- PascalCase aliases matching the store's JSON wire format
- Frozen instances (immutable once constructed)
"""

from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class SdsTypeCode(IntEnum):
    """Store type codes used on the wire."""

    OBJECT = 1
    DOUBLE = 14
    DATE_TIME = 16


class SemanticType(str, Enum):
    """Property value types the schema builder knows how to describe."""

    DOUBLE = "Double"
    DATE_TIME = "DateTime"


class WireModel(BaseModel):
    """Base for every model exchanged with the store."""

    class Config:
        """Pydantic configuration."""

        frozen = True
        populate_by_name = True

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON-ready dict the store expects."""
        return self.model_dump(mode="json", by_alias=True)


class PropertyValueType(WireModel):
    """Value type descriptor nested inside a property."""

    name: str = Field(..., alias="Name")
    code: int = Field(..., alias="SdsTypeCode")


class TypeProperty(WireModel):
    """One field of a schema."""

    id: str = Field(..., min_length=1, alias="Id")
    name: str = Field(..., min_length=1, alias="Name")
    is_key: bool = Field(False, alias="IsKey")
    value_type: PropertyValueType = Field(..., alias="SdsType")


class SchemaType(WireModel):
    """A schema registered with the store.

    Exactly one property must be the key (the ordering index).
    """

    id: str = Field(..., min_length=1, alias="Id")
    name: str = Field(..., min_length=1, alias="Name")
    version: int = Field(1, ge=1, alias="Version")
    type_code: int = Field(SdsTypeCode.OBJECT, alias="SdsTypeCode")
    properties: tuple[TypeProperty, ...] = Field(..., alias="Properties")

    @model_validator(mode="after")
    def validate_single_key(self) -> "SchemaType":
        keys = [p.id for p in self.properties if p.is_key]
        if len(keys) != 1:
            raise ValueError(
                f"Type {self.id} must have exactly one key property, found {len(keys)}"
            )
        return self

    @property
    def key_property(self) -> TypeProperty:
        return next(p for p in self.properties if p.is_key)


class Stream(WireModel):
    """A named, ordered collection of events conforming to one type."""

    id: str = Field(..., min_length=1, alias="Id")
    name: str = Field(..., min_length=1, alias="Name")
    type_id: str = Field(..., min_length=1, alias="TypeId")
