import logging
import uuid
from functools import lru_cache
from pathlib import Path

import boto3

from app.config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_client():
    session = boto3.session.Session()
    return session.client(
        "s3",
        region_name=settings.SPACES_REGION,
        endpoint_url=settings.SPACES_ENDPOINT,
        aws_access_key_id=settings.SPACES_KEY,
        aws_secret_access_key=settings.SPACES_SECRET,
    )


def _join_path(*segments: str) -> str:
    cleaned = [segment.strip("/") for segment in segments if segment and segment.strip("/")]
    return "/".join(cleaned)


def build_key(folder: str, filename: str) -> str:
    extension = Path(filename or "").suffix.lower()
    return _join_path(settings.SPACES_BASE_PATH, folder, f"{uuid.uuid4().hex}{extension}")


def public_url(key: str) -> str:
    if settings.SPACES_CDN_URL:
        return f"{settings.SPACES_CDN_URL}/{key}"
    endpoint = (settings.SPACES_ENDPOINT or "").rstrip("/")
    return f"{endpoint}/{settings.SPACES_NAME}/{key}"


def upload_file(data: bytes, key: str, content_type: str | None = None) -> str:
    """Store ``data`` publicly under ``key`` and return its retrievable URL."""
    extra_args = {"ACL": "public-read"}
    if content_type:
        extra_args["ContentType"] = content_type

    get_client().put_object(
        Bucket=settings.SPACES_NAME,
        Key=key,
        Body=data,
        **extra_args
    )
    url = public_url(key)
    logger.info("Stored %s bytes at %s", len(data), key)
    return url
