from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text, false

from app.database import Base, utcnow

LIVE_SERIAL_INDEX = "uq_breathing_guides_live_serial"


class BreathingGuide(Base):
    __tablename__ = "breathing_guides"

    id = Column(Integer, primary_key=True, index=True)
    serial = Column(Integer, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    guide = Column(Text, nullable=False)  # step by step instructions
    description = Column(Text, nullable=False)
    audio_url = Column(String(500), nullable=True)
    duration = Column(Integer, nullable=True)  # seconds
    is_featured = Column(Boolean, default=False, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # A serial may be reused once the guide holding it is soft-deleted
    __table_args__ = (
        Index(
            LIVE_SERIAL_INDEX,
            "serial",
            unique=True,
            postgresql_where=is_deleted == false(),
            sqlite_where=is_deleted == false(),
        ),
    )
