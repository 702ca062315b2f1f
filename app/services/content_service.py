"""Query helpers shared by the soft-deletable content tables (blogs, guides)."""
import logging
import re

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from app.database import utcnow

logger = logging.getLogger(__name__)

SERIAL_TERM = re.compile(r"[+-]?[0-9]+")


def parse_serial_search(search: str) -> int | None:
    """Return the integer a search term spells, or ``None`` for free text."""
    term = search.strip()
    if not SERIAL_TERM.fullmatch(term):
        return None
    return int(term)


def text_search(model, search: str, columns: tuple[str, ...]):
    pattern = f"%{search}%"
    return or_(*(getattr(model, column).ilike(pattern) for column in columns))


def apply_visibility_filters(query: Query, model, featured: bool, include_deleted: bool) -> Query:
    # Featured and deleted are independent conditions, AND-ed together
    if not include_deleted:
        query = query.filter(model.is_deleted == False)  # noqa: E712
    if featured:
        query = query.filter(model.is_featured == True)  # noqa: E712
    return query


def newest_first(query: Query, model) -> Query:
    return query.order_by(model.created_at.desc(), model.id.desc())


def get_live(db: Session, model, item_id: int):
    return (
        db.query(model)
        .filter(model.id == item_id, model.is_deleted == False)  # noqa: E712
        .first()
    )


def soft_delete(db: Session, item):
    now = utcnow()
    item.is_deleted = True
    item.deleted_at = now
    item.updated_at = now
    db.commit()
    db.refresh(item)
    logger.info("Soft-deleted %s id=%s", item.__tablename__, item.id)
    return item


def count_live(db: Session, model, featured: bool = False) -> int:
    query = apply_visibility_filters(db.query(func.count(model.id)), model, featured, include_deleted=False)
    return query.scalar() or 0
