import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.routers.users import user_payload
from app.schemas.user import SigninRequest, SignupRequest
from app.services import user_service
from app.utils.exceptions import InvalidCredentialsError
from app.utils.response import create_response, handle_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/signup")
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    try:
        user = user_service.create_user(
            db,
            email=body.email,
            password=body.password,
            name=body.name,
            role=body.role.value,
            phone=body.phone,
            address=body.address,
            duplicate_status=status.HTTP_409_CONFLICT,
        )
        return create_response(message="User created successfully", user=user_payload(user))
    except Exception as exc:
        return handle_exception(exc)


@router.post("/signin")
def signin(body: SigninRequest, db: Session = Depends(get_db)):
    try:
        user = user_service.authenticate_user(db, body.email, body.password)
        if not user:
            logger.info("Rejected sign-in attempt")
            raise InvalidCredentialsError()

        return create_response(message="Authentication successful", user=user_payload(user))
    except Exception as exc:
        return handle_exception(exc)
