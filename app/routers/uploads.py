import logging

from fastapi import APIRouter, File, HTTPException, Query, UploadFile, status

from app.config import settings
from app.schemas.upload import UploadResponse, UploadRoute
from app.services import spaces_service
from app.utils.exceptions import UploadRejectedError
from app.utils.response import create_response, handle_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/uploadthing", tags=["Uploads"])

UPLOAD_ROUTES = {
    route.slug: route
    for route in (
        UploadRoute(
            slug="blogImageUploader",
            folder="blog-images",
            mime_prefix="image/",
            max_bytes=settings.IMAGE_UPLOAD_MAX_BYTES,
        ),
        UploadRoute(
            slug="breathingGuideAudioUploader",
            folder="breathing-guide-audio",
            mime_prefix="audio/",
            max_bytes=settings.AUDIO_UPLOAD_MAX_BYTES,
        ),
    )
}

# Uploads are only reachable from the admin dashboard
UPLOADED_BY = "admin"


def _format_size(size: int) -> str:
    megabytes = size / (1024 * 1024)
    return f"{megabytes:g}MB"


def _resolve_route(slug: str | None) -> UploadRoute:
    route = UPLOAD_ROUTES.get(slug or "")
    if not route:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown upload route: {slug}")
    return route


@router.get("")
def describe_upload_routes():
    routes = [
        {
            "slug": route.slug,
            "fileType": route.mime_prefix.rstrip("/"),
            "maxFileSize": _format_size(route.max_bytes),
        }
        for route in UPLOAD_ROUTES.values()
    ]
    return create_response(routes=routes)


@router.post("")
async def upload(
    slug: str | None = Query(None, description="blogImageUploader or breathingGuideAudioUploader"),
    file: UploadFile = File(...),
):
    try:
        route = _resolve_route(slug)

        content_type = file.content_type or ""
        if not content_type.startswith(route.mime_prefix):
            raise UploadRejectedError(f"Unsupported file type: {content_type or 'unknown'}")

        contents = await file.read(route.max_bytes + 1)
        if not contents:
            raise UploadRejectedError("Empty file upload")
        if len(contents) > route.max_bytes:
            raise UploadRejectedError(f"File exceeds the {_format_size(route.max_bytes)} limit")

        key = spaces_service.build_key(route.folder, file.filename)
        url = spaces_service.upload_file(contents, key, content_type=content_type)
        logger.info("Upload complete for %s via %s", UPLOADED_BY, route.slug)

        uploaded = UploadResponse(
            url=url,
            key=key,
            name=file.filename or key,
            size=len(contents),
            type=content_type,
            uploaded_by=UPLOADED_BY,
        )
        return create_response(**uploaded.to_payload())
    except Exception as exc:
        return handle_exception(exc, "Upload failed")
