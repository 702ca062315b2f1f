import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db, utcnow
from app.models.breathing_guide import BreathingGuide
from app.schemas.breathing_guide import (
    BreathingGuideCreateRequest,
    BreathingGuideResponse,
    BreathingGuideUpdateRequest,
)
from app.services.content_service import (
    apply_visibility_filters,
    get_live,
    newest_first,
    parse_serial_search,
    soft_delete,
    text_search,
)
from app.utils.exceptions import DuplicateSerialError, NotFoundError
from app.utils.params import parse_id
from app.utils.response import create_response, handle_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/breathing-guides", tags=["Breathing Guides"])

SEARCH_COLUMNS = ("title", "description", "guide")


def _guide_payload(guide: BreathingGuide) -> dict:
    return BreathingGuideResponse.model_validate(guide).to_payload()


def _get_live_guide(db: Session, guide_id: str) -> BreathingGuide:
    guide = get_live(db, BreathingGuide, parse_id(guide_id, "guide"))
    if not guide:
        raise NotFoundError("Breathing guide not found")
    return guide


def serial_taken(db: Session, serial: int, live_only: bool = False, exclude_id: int | None = None) -> bool:
    query = db.query(BreathingGuide.id).filter(BreathingGuide.serial == serial)
    if live_only:
        query = query.filter(BreathingGuide.is_deleted == False)  # noqa: E712
    if exclude_id is not None:
        query = query.filter(BreathingGuide.id != exclude_id)
    return query.first() is not None


def _commit_guide(db: Session, guide: BreathingGuide) -> BreathingGuide:
    # The live-serial unique index is authoritative when two writers race
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Serial uniqueness violated for serial=%s: %s", guide.serial, exc.orig)
        raise DuplicateSerialError() from exc
    db.refresh(guide)
    return guide


@router.get("")
def list_breathing_guides(
    featured: bool = Query(False, description="Only return featured guides."),
    deleted: bool = Query(False, description="Include soft-deleted guides."),
    search: str | None = Query(
        None,
        description="An integer matches the serial exactly; other text is matched against title, description and guide.",
    ),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(BreathingGuide)
        if search:
            serial = parse_serial_search(search)
            if serial is not None:
                query = query.filter(BreathingGuide.serial == serial)
            else:
                query = query.filter(text_search(BreathingGuide, search, SEARCH_COLUMNS))
        query = apply_visibility_filters(query, BreathingGuide, featured=featured, include_deleted=deleted)
        guides = newest_first(query, BreathingGuide).all()
        return create_response(breathingGuides=[_guide_payload(guide) for guide in guides])
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch breathing guides")


@router.post("")
def create_breathing_guide(payload: BreathingGuideCreateRequest, db: Session = Depends(get_db)):
    try:
        if payload.serial is None or not payload.title or not payload.guide or not payload.description:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Serial, title, guide, and description are required",
            )

        # Deleted guides still reserve their serial at creation time
        if serial_taken(db, payload.serial):
            raise DuplicateSerialError()

        guide = BreathingGuide(
            serial=payload.serial,
            title=payload.title,
            guide=payload.guide,
            description=payload.description,
            audio_url=payload.audio_url or None,
            duration=payload.duration,
            is_featured=bool(payload.is_featured),
            is_deleted=False,
        )
        db.add(guide)
        guide = _commit_guide(db, guide)
        logger.info("Created breathing guide id=%s serial=%s", guide.id, guide.serial)

        return create_response(guide=_guide_payload(guide))
    except Exception as exc:
        return handle_exception(exc, "Failed to create breathing guide")


@router.get("/{guide_id}")
def get_breathing_guide(guide_id: str, db: Session = Depends(get_db)):
    try:
        guide = _get_live_guide(db, guide_id)
        return create_response(guide=_guide_payload(guide))
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch breathing guide")


@router.put("/{guide_id}")
def update_breathing_guide(
    guide_id: str,
    payload: BreathingGuideUpdateRequest,
    db: Session = Depends(get_db),
):
    try:
        guide = _get_live_guide(db, guide_id)
        supplied = payload.model_fields_set

        if payload.serial is not None and payload.serial != guide.serial:
            if serial_taken(db, payload.serial, live_only=True, exclude_id=guide.id):
                raise DuplicateSerialError()
            guide.serial = payload.serial

        if payload.title:
            guide.title = payload.title
        if payload.guide:
            guide.guide = payload.guide
        if payload.description:
            guide.description = payload.description
        if "audio_url" in supplied:
            guide.audio_url = payload.audio_url or None
        if "duration" in supplied:
            guide.duration = payload.duration
        if "is_featured" in supplied:
            guide.is_featured = bool(payload.is_featured)
        guide.updated_at = utcnow()

        guide = _commit_guide(db, guide)
        return create_response(guide=_guide_payload(guide))
    except Exception as exc:
        return handle_exception(exc, "Failed to update breathing guide")


@router.delete("/{guide_id}")
def delete_breathing_guide(guide_id: str, db: Session = Depends(get_db)):
    try:
        guide = soft_delete(db, _get_live_guide(db, guide_id))
        return create_response(message="Breathing guide deleted successfully", guide=_guide_payload(guide))
    except Exception as exc:
        return handle_exception(exc, "Failed to delete breathing guide")
