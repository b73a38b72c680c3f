from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime, timezone


class LinkCreate(BaseModel):
    """Schema for creating a new short link"""
    url: str = Field(..., description="Destination URL to shorten")
    short_code: Optional[str] = Field(None, description="Requested short code (6-8 alphanumeric characters)")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LinkRecord(BaseModel):
    """
    Snapshot of a stored link.

    Instances are detached copies of a row; mutating one never touches the
    directory.
    """
    id: str
    short_code: str
    original_url: str
    clicks: int
    last_clicked_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    @field_validator("last_clicked_at", "created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # SQLite drops tzinfo on the way back
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    ok: bool
    version: str
    uptime: float
    timestamp: datetime
