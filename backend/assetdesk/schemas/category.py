"""Pydantic schemas for asset categories and their custom field schema."""
import re
import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

FieldType = Literal["text", "textarea", "number", "select", "date", "boolean"]

_LABEL_TRAILER = re.compile(r"[\s*]+$")


class FieldDefinition(BaseModel):
    """One custom field of a category. ``label`` is what CSV headers carry."""

    model_config = ConfigDict(extra="ignore")

    key: str = Field(min_length=1)
    label: str = Field(min_length=1)
    type: FieldType = "text"
    required: bool = False
    options: list[str] | None = None

    @field_validator("required", mode="before")
    @classmethod
    def _none_is_optional(cls, v):
        return False if v is None else v

    @field_validator("label")
    @classmethod
    def _header_safe_label(cls, v: str) -> str:
        # Must survive the header cleanup applied to uploaded CSVs
        label = _LABEL_TRAILER.sub("", v.strip())
        if not label:
            raise ValueError("label must contain more than whitespace and '*'")
        return label


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    name: str
    description: str | None
    icon: str | None
    field_schema: list[FieldDefinition]
    is_active: bool
    created_at: datetime
