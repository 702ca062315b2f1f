from pydantic import BaseModel

from app.schemas.base import CamelModel


class UploadRoute(BaseModel):
    slug: str
    folder: str
    mime_prefix: str
    max_bytes: int


class UploadResponse(CamelModel):
    url: str
    key: str
    name: str
    size: int
    type: str
    uploaded_by: str
