from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.routers.users import user_payload
from app.schemas.user import ActivityUpdateRequest, ProfileUpdateRequest
from app.services import user_service
from app.utils.exceptions import NotFoundError
from app.utils.params import parse_id
from app.utils.response import create_response, handle_exception

# Registered ahead of the users router so /profile is not read as a user id
router = APIRouter(prefix="/api/users/profile", tags=["Profile"])


@router.get("")
def get_profile(
    user_id: str | None = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    try:
        if not user_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID is required")

        user = user_service.find_user_by_id(db, parse_id(user_id, "user"))
        if not user:
            raise NotFoundError("User not found")

        return create_response(user=user_payload(user))
    except Exception as exc:
        return handle_exception(exc)


@router.put("")
def update_profile(body: ProfileUpdateRequest, db: Session = Depends(get_db)):
    try:
        updates = body.model_dump(exclude_unset=True, exclude={"user_id"})
        user = user_service.update_user_profile(db, body.user_id, **updates)
        if not user:
            raise NotFoundError("User not found")

        return create_response(message="Profile updated successfully", user=user_payload(user))
    except Exception as exc:
        return handle_exception(exc)


@router.post("")
def update_activity(body: ActivityUpdateRequest, db: Session = Depends(get_db)):
    try:
        if body.type == "watched":
            user = user_service.update_last_watched(db, body.user_id)
        else:
            user = user_service.update_last_read(db, body.user_id)
        if not user:
            raise NotFoundError("User not found")

        return create_response(message=f"Last {body.type} updated successfully", user=user_payload(user))
    except Exception as exc:
        return handle_exception(exc)
