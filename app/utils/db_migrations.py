import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from app.models.breathing_guide import LIVE_SERIAL_INDEX, BreathingGuide

logger = logging.getLogger(__name__)


def ensure_user_status_column(engine: Engine) -> None:
    inspector = inspect(engine)
    if "users" not in inspector.get_table_names():
        return
    columns = {column["name"] for column in inspector.get_columns("users")}
    if "status" in columns:
        return

    logger.info("Adding users.status column")
    with engine.begin() as connection:
        if engine.dialect.name == "postgresql":
            connection.execute(
                text(
                    "DO $$ BEGIN "
                    "CREATE TYPE user_status AS ENUM ('regular', 'premium'); "
                    "EXCEPTION WHEN duplicate_object THEN NULL; END $$"
                )
            )
            connection.execute(
                text("ALTER TABLE users ADD COLUMN status user_status NOT NULL DEFAULT 'regular'")
            )
        else:
            connection.execute(
                text("ALTER TABLE users ADD COLUMN status VARCHAR(7) NOT NULL DEFAULT 'regular'")
            )


def ensure_live_serial_index(engine: Engine) -> None:
    inspector = inspect(engine)
    if "breathing_guides" not in inspector.get_table_names():
        return
    existing = {index["name"] for index in inspector.get_indexes("breathing_guides")}
    if LIVE_SERIAL_INDEX in existing:
        return

    logger.info("Creating %s index", LIVE_SERIAL_INDEX)
    for index in BreathingGuide.__table__.indexes:
        if index.name == LIVE_SERIAL_INDEX:
            index.create(bind=engine, checkfirst=True)


def run_schema_fixes(engine: Engine) -> None:
    ensure_user_status_column(engine)
    ensure_live_serial_index(engine)
