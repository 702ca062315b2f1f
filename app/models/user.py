
from sqlalchemy import Column, DateTime, Enum, Integer, String, Text

from app.database import Base, utcnow

USER_ROLES = ("admin", "user")
USER_STATUSES = ("regular", "premium")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # Never serialized; only read by authentication
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(Enum(*USER_ROLES, name="user_role"), default="user", nullable=False)
    status = Column(Enum(*USER_STATUSES, name="user_status"), default="regular", nullable=False)

    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)

    # Activity markers
    last_watched = Column(DateTime(timezone=True), nullable=True)
    last_read = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
