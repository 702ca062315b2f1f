from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel


class BreathingGuideCreateRequest(CamelModel):
    serial: int | None = Field(None, ge=1)
    title: str | None = Field(None, max_length=255)
    guide: str | None = None
    description: str | None = None
    audio_url: str | None = Field(None, max_length=500)
    duration: int | None = Field(None, ge=0)
    is_featured: bool | None = None


class BreathingGuideUpdateRequest(CamelModel):
    serial: int | None = Field(None, ge=1)
    title: str | None = Field(None, max_length=255)
    guide: str | None = None
    description: str | None = None
    audio_url: str | None = Field(None, max_length=500)
    duration: int | None = Field(None, ge=0)
    is_featured: bool | None = None


class BreathingGuideResponse(CamelModel):
    id: int
    serial: int
    title: str
    guide: str
    description: str
    audio_url: str | None = None
    duration: int | None = None
    is_featured: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
