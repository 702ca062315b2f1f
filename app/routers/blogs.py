import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.database import get_db, utcnow
from app.models.blog import Blog
from app.schemas.blog import BlogCreateRequest, BlogResponse, BlogUpdateRequest
from app.services.content_service import (
    apply_visibility_filters,
    get_live,
    newest_first,
    soft_delete,
    text_search,
)
from app.utils.exceptions import NotFoundError
from app.utils.params import parse_id
from app.utils.response import create_response, handle_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blogs", tags=["Blogs"])

SEARCH_COLUMNS = ("title", "description", "body")


def _blog_payload(blog: Blog) -> dict:
    return BlogResponse.model_validate(blog).to_payload()


def _get_live_blog(db: Session, blog_id: str) -> Blog:
    blog = get_live(db, Blog, parse_id(blog_id, "blog"))
    if not blog:
        raise NotFoundError("Blog not found")
    return blog


@router.get("")
def list_blogs(
    featured: bool = Query(False, description="Only return featured blogs."),
    deleted: bool = Query(False, description="Include soft-deleted blogs."),
    search: str | None = Query(None, description="Substring matched against title, description and body."),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Blog)
        if search:
            query = query.filter(text_search(Blog, search, SEARCH_COLUMNS))
        query = apply_visibility_filters(query, Blog, featured=featured, include_deleted=deleted)
        blogs = newest_first(query, Blog).all()
        return create_response(blogs=[_blog_payload(blog) for blog in blogs])
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch blogs")


@router.post("")
def create_blog(payload: BlogCreateRequest, db: Session = Depends(get_db)):
    try:
        if not payload.title or not payload.description or not payload.body:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Title, description, and body are required",
            )

        blog = Blog(
            title=payload.title,
            description=payload.description,
            body=payload.body,
            image_url=payload.image_url or None,
            is_featured=bool(payload.is_featured),
            is_deleted=False,
        )
        db.add(blog)
        db.commit()
        db.refresh(blog)
        logger.info("Created blog id=%s", blog.id)

        return create_response(blog=_blog_payload(blog))
    except Exception as exc:
        return handle_exception(exc, "Failed to create blog")


@router.get("/{blog_id}")
def get_blog(blog_id: str, db: Session = Depends(get_db)):
    try:
        blog = _get_live_blog(db, blog_id)
        return create_response(blog=_blog_payload(blog))
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch blog")


@router.put("/{blog_id}")
def update_blog(blog_id: str, payload: BlogUpdateRequest, db: Session = Depends(get_db)):
    try:
        blog = _get_live_blog(db, blog_id)
        supplied = payload.model_fields_set

        # Blank text keeps the stored value
        if payload.title:
            blog.title = payload.title
        if payload.description:
            blog.description = payload.description
        if payload.body:
            blog.body = payload.body
        # Present keys win, even when empty or false
        if "image_url" in supplied:
            blog.image_url = payload.image_url or None
        if "is_featured" in supplied:
            blog.is_featured = bool(payload.is_featured)
        blog.updated_at = utcnow()

        db.commit()
        db.refresh(blog)

        return create_response(blog=_blog_payload(blog))
    except Exception as exc:
        return handle_exception(exc, "Failed to update blog")


@router.delete("/{blog_id}")
def delete_blog(blog_id: str, db: Session = Depends(get_db)):
    try:
        blog = soft_delete(db, _get_live_blog(db, blog_id))
        return create_response(message="Blog deleted successfully", blog=_blog_payload(blog))
    except Exception as exc:
        return handle_exception(exc, "Failed to delete blog")
