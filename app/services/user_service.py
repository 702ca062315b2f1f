"""Data access for user accounts.

Lookups return the ORM row, password hash included; routers serialize
through ``UserResponse`` which never carries the hash.
"""
import logging

from passlib.context import CryptContext
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import utcnow
from app.models.user import USER_ROLES, USER_STATUSES, User
from app.utils.exceptions import DuplicateEmailError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

PROFILE_FIELDS = ("name", "phone", "address")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def email_exists(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def find_user_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def _commit_user(db: Session, user: User, duplicate_message: str, duplicate_status: int | None = None) -> User:
    # The unique index on email has the final word over the pre-checks
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Email uniqueness violated for %s: %s", user.email, exc.orig)
        raise DuplicateEmailError(duplicate_message, status_code=duplicate_status) from exc
    db.refresh(user)
    return user


def create_user(
    db: Session,
    email: str,
    password: str,
    name: str,
    role: str = "user",
    phone: str | None = None,
    address: str | None = None,
    duplicate_status: int | None = None,
) -> User:
    if email_exists(db, email):
        raise DuplicateEmailError("Email already registered", status_code=duplicate_status)

    user = User(
        email=email,
        password_hash=hash_password(password),
        name=name,
        role=role or "user",
        phone=phone or None,
        address=address or None,
    )
    db.add(user)
    user = _commit_user(db, user, "Email already registered", duplicate_status)
    logger.info("Created user id=%s role=%s", user.id, user.role)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Return the user when the password matches; ``None`` otherwise.

    An unknown email and a wrong password are indistinguishable to the caller.
    """
    user = find_user_by_email(db, email)
    if not user:
        # Burn a comparable amount of time so response timing leaks nothing
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def update_user_profile(db: Session, user_id: int, **updates) -> User | None:
    user = find_user_by_id(db, user_id)
    if not user:
        return None

    for field in PROFILE_FIELDS:
        if field in updates:
            setattr(user, field, updates[field])
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    return user


def update_user(
    db: Session,
    user: User,
    name: str | None = None,
    email: str | None = None,
    role: str | None = None,
    status: str | None = None,
    **optional,
) -> User:
    """Admin edit. Empty name/email/role/status keep the stored value;
    ``phone`` and ``address`` are applied whenever passed, even as ``None``.
    """
    if email and email != user.email and email_exists(db, email):
        raise DuplicateEmailError("Email already exists")

    if name:
        user.name = name
    if email:
        user.email = email
    if role:
        user.role = role
    if status:
        user.status = status
    for field in ("phone", "address"):
        if field in optional:
            setattr(user, field, optional[field])
    user.updated_at = utcnow()
    return _commit_user(db, user, "Email already exists")


def update_user_role(db: Session, user_id: int, role: str) -> User | None:
    user = find_user_by_id(db, user_id)
    if not user:
        return None
    user.role = role
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    logger.info("User id=%s role set to %s", user_id, role)
    return user


def update_user_status(db: Session, user_id: int, status: str) -> User | None:
    user = find_user_by_id(db, user_id)
    if not user:
        return None
    user.status = status
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    logger.info("User id=%s status set to %s", user_id, status)
    return user


def _touch(db: Session, user_id: int, field: str) -> User | None:
    user = find_user_by_id(db, user_id)
    if not user:
        return None
    now = utcnow()
    setattr(user, field, now)
    user.updated_at = now
    db.commit()
    db.refresh(user)
    return user


def update_last_watched(db: Session, user_id: int) -> User | None:
    return _touch(db, user_id, "last_watched")


def update_last_read(db: Session, user_id: int) -> User | None:
    return _touch(db, user_id, "last_read")


def delete_user(db: Session, user_id: int) -> bool:
    user = find_user_by_id(db, user_id)
    if not user:
        return False
    db.delete(user)
    db.commit()
    logger.info("Deleted user id=%s", user_id)
    return True


def list_users(
    db: Session,
    search: str | None = None,
    role: str | None = None,
    status: str | None = None,
) -> list[User]:
    query = db.query(User)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(User.name.ilike(pattern), User.email.ilike(pattern)))
    # Unknown filter values are ignored rather than rejected
    if role in USER_ROLES:
        query = query.filter(User.role == role)
    if status in USER_STATUSES:
        query = query.filter(User.status == status)
    return query.order_by(User.created_at.desc(), User.id.desc()).all()


def count_users(db: Session, role: str | None = None, status: str | None = None) -> int:
    query = db.query(func.count(User.id))
    if role:
        query = query.filter(User.role == role)
    if status:
        query = query.filter(User.status == status)
    return query.scalar() or 0
