"""Activity event read schema."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class ActivityEventRead(BaseModel):
    id: UUID
    project_id: UUID
    editor_id: UUID | None
    event_type: str
    event_metadata: dict[str, Any] | None
    created_at: datetime

    model_config = {"from_attributes": True}
