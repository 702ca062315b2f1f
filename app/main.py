import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import Database
from app.routers import (
    auth,
    blogs,
    breathing_guides,
    profile,
    system,
    uploads,
    users,
)
from app.utils.response import validation_exception_handler
from seed import run_seed

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def build_database() -> Database:
    return Database(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = app.state.database
    # Auto create tables
    database.create_all()
    if settings.SEED_ON_STARTUP:
        run_seed(database)
    logger.info("%s started", settings.PROJECT_NAME)
    yield
    database.dispose()


def create_app(database: Database | None = None) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Admin API for ZenZone blogs, breathing guides and user accounts.",
        lifespan=lifespan,
    )
    app.state.database = database or build_database()

    # CORS for the admin dashboard
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(system.router)
    app.include_router(auth.router)
    app.include_router(blogs.router)
    app.include_router(breathing_guides.router)
    # Profile routes must win over /api/users/{user_id}
    app.include_router(profile.router)
    app.include_router(users.router)
    app.include_router(uploads.router)
    return app


app = create_app()
