from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import USER_ROLES, User
from app.schemas.user import RoleUpdateRequest, UserResponse, UserUpdateRequest
from app.services import user_service
from app.utils.exceptions import NotFoundError
from app.utils.params import parse_id
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/users", tags=["Users"])


def user_payload(user: User) -> dict:
    return UserResponse.model_validate(user).to_payload()


def _get_user(db: Session, user_id: str) -> User:
    user = user_service.find_user_by_id(db, parse_id(user_id, "user"))
    if not user:
        raise NotFoundError("User not found")
    return user


@router.get("")
def list_users(
    search: str | None = Query(None, description="Substring matched against name and email."),
    role: str | None = Query(None, description="admin or user"),
    status_filter: str | None = Query(None, alias="status", description="regular or premium"),
    db: Session = Depends(get_db),
):
    try:
        users = user_service.list_users(db, search=search, role=role, status=status_filter)
        return create_response(users=[user_payload(user) for user in users])
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch users")


@router.put("")
def update_role(body: RoleUpdateRequest, db: Session = Depends(get_db)):
    try:
        if not body.user_id or not body.role:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID and role are required")
        if body.role not in USER_ROLES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='Invalid role. Must be "admin" or "user"',
            )

        user = user_service.update_user_role(db, body.user_id, body.role)
        if not user:
            raise NotFoundError("User not found")

        return create_response(message="User role updated successfully", user=user_payload(user))
    except Exception as exc:
        return handle_exception(exc)


@router.get("/{user_id}")
def get_user(user_id: str, db: Session = Depends(get_db)):
    try:
        user = _get_user(db, user_id)
        return create_response(user=user_payload(user))
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch user")


@router.put("/{user_id}")
def update_user(user_id: str, body: UserUpdateRequest, db: Session = Depends(get_db)):
    try:
        user = _get_user(db, user_id)
        optional = {
            field: getattr(body, field)
            for field in ("phone", "address")
            if field in body.model_fields_set
        }
        user = user_service.update_user(
            db,
            user,
            name=body.name,
            email=body.email,
            role=body.role.value if body.role else None,
            status=body.status.value if body.status else None,
            **optional,
        )
        return create_response(user=user_payload(user))
    except Exception as exc:
        return handle_exception(exc, "Failed to update user")


@router.delete("/{user_id}")
def delete_user(user_id: str, db: Session = Depends(get_db)):
    try:
        if not user_service.delete_user(db, parse_id(user_id, "user")):
            raise NotFoundError("User not found")
        return create_response(message="User deleted successfully")
    except Exception as exc:
        return handle_exception(exc, "Failed to delete user")
