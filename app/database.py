import logging
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Database:
    """Owns the engine, its connection pool and the session factory.

    Built once per process by the application factory and shared with the
    request handlers through ``app.state.database``.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 20,
        max_overflow: int = 0,
        pool_timeout: float = 2,
        pool_recycle: int = 30,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs = {"echo": echo, "pool_pre_ping": True}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
            )
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def create_all(self) -> None:
        # Models must be imported so their tables are registered on Base.metadata
        from app.models import blog, breathing_guide, user  # noqa: F401
        from app.utils.db_migrations import run_schema_fixes

        Base.metadata.create_all(bind=self.engine)
        run_schema_fixes(self.engine)

    def drop_all(self) -> None:
        from app.models import blog, breathing_guide, user  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> dict:
        """Run a trivial query and report what the connection sees."""
        with self.engine.connect() as connection:
            if self.engine.dialect.name == "sqlite":
                row = connection.execute(
                    text("SELECT 'main', NULL, sqlite_version(), CURRENT_TIMESTAMP")
                ).one()
            else:
                row = connection.execute(
                    text("SELECT current_database(), current_user, version(), NOW()")
                ).one()
        database_name, user_name, version, current_time = row
        return {
            "databaseName": database_name,
            "userName": user_name,
            "version": version,
            "currentTime": current_time,
        }

    def dispose(self) -> None:
        logger.info("Disposing database engine for %s", self.engine.url.render_as_string(hide_password=True))
        self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request):
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
