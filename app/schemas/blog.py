from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel


class BlogCreateRequest(CamelModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    body: str | None = None
    image_url: str | None = Field(None, max_length=500)
    is_featured: bool | None = None


class BlogUpdateRequest(CamelModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    body: str | None = None
    image_url: str | None = Field(None, max_length=500)
    is_featured: bool | None = None


class BlogResponse(CamelModel):
    id: int
    title: str
    description: str
    body: str
    image_url: str | None = None
    is_featured: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
