"""Pydantic schemas for bulk asset actions."""
import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

BulkActionName = Literal["update_status", "assign", "unassign", "delete"]


class BulkActionData(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str | None = None
    assigned_to_id: uuid.UUID | None = None


class BulkActionRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    action: BulkActionName
    asset_ids: list[uuid.UUID] = Field(min_length=1)
    data: BulkActionData | None = None


class BulkActionResponse(BaseModel):
    success: bool = True
    action: str
    count: int
