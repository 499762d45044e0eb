"""Pydantic schemas for the CSV bulk import wizard."""
import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValidatedRow(_CamelModel):
    row_number: int
    data: dict[str, str]


class InvalidRow(_CamelModel):
    row_number: int
    data: dict[str, str]
    errors: list[str]


class ImportValidateResponse(_CamelModel):
    total_rows: int
    valid_count: int
    invalid_count: int
    valid_rows: list[ValidatedRow]
    invalid_rows: list[InvalidRow]  # preview, capped
    category_id: uuid.UUID
    category_name: str


class ImportExecuteRequest(_CamelModel):
    category_id: uuid.UUID
    # Keyed by column label, exactly as returned from validate
    rows: list[dict[str, Any]] = Field(min_length=1)

    @field_validator("rows")
    @classmethod
    def _stringify_cells(cls, rows: list[dict[str, Any]]) -> list[dict[str, str]]:
        return [
            {k: "" if v is None else str(v) for k, v in row.items()}
            for row in rows
        ]


class ImportExecuteResponse(_CamelModel):
    success: bool = True
    created: int
    category_name: str
