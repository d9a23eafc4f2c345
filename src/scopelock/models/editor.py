"""Editor model - owner of projects."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.scopelock.models.base import utc_now


class Editor(SQLModel, table=True):
    """Editor account. Authentication lives outside this package."""

    __tablename__ = "editors"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    full_name: str = Field(max_length=100)
    created_at: datetime = Field(default_factory=utc_now)
