import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ActivityAssetStub(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    name: str
    asset_tag: str | None


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    action: str
    details: dict[str, Any] | None
    asset_id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime
    asset: ActivityAssetStub | None = None


class ActivityPage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    activities: list[ActivityOut]
    page: int
    page_size: int
    total: int
    total_pages: int
