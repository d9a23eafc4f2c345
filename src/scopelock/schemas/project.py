"""Project input and read schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.scopelock.models.enums import RequestType


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    title: str = Field(min_length=1, max_length=200)
    client_name: str = Field(min_length=1, max_length=100)
    client_email: EmailStr
    allowed_request_types: list[RequestType] = Field(default_factory=list)
    revision_cap: int = Field(default=2, ge=0)

    @field_validator("title", "client_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Value cannot be empty or whitespace only")
        return v

    @field_validator("allowed_request_types")
    @classmethod
    def dedupe_request_types(cls, v: list[RequestType]) -> list[RequestType]:
        return list(dict.fromkeys(v))


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    editor_id: UUID
    title: str
    client_name: str
    client_email: str
    allowed_request_types: list[str]
    revision_cap: int
    revision_used: int
    revisions_remaining: int
    state: str
    approved_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}
