import logging

from app.config import settings
from app.database import Database
from app.models.user import User
from app.services.user_service import create_user

logger = logging.getLogger(__name__)


def run_seed(database: Database | None = None):
    """Create the default admin account when no users exist yet."""
    database = database or Database(settings.DATABASE_URL)
    db = database.session()
    try:
        if db.query(User).count() == 0:
            create_user(
                db,
                email=settings.SEED_ADMIN_EMAIL,
                password=settings.SEED_ADMIN_PASSWORD,
                name=settings.SEED_ADMIN_NAME,
                role="admin",
            )
            logger.info("Default admin user seeded: %s", settings.SEED_ADMIN_EMAIL)
        else:
            logger.info("Users already present, skipping seeding.")
    except Exception:
        logger.exception("Seeding error")
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    seed_database = Database(settings.DATABASE_URL)
    seed_database.create_all()
    run_seed(seed_database)
