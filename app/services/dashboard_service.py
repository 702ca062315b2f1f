from sqlalchemy.orm import Session

from app.models.blog import Blog
from app.models.breathing_guide import BreathingGuide
from app.services.content_service import count_live
from app.services.user_service import count_users


def get_dashboard_metrics(db: Session) -> dict:
    """Headline numbers for the admin dashboard; soft-deleted content is not counted."""
    return {
        "totalUsers": count_users(db),
        "adminUsers": count_users(db, role="admin"),
        "premiumUsers": count_users(db, status="premium"),
        "totalBlogs": count_live(db, Blog),
        "featuredBlogs": count_live(db, Blog, featured=True),
        "totalBreathingGuides": count_live(db, BreathingGuide),
        "featuredBreathingGuides": count_live(db, BreathingGuide, featured=True),
    }
