from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.database import Database, get_database, get_db
from app.services.dashboard_service import get_dashboard_metrics
from app.utils.response import create_response, handle_exception

router = APIRouter(tags=["System"])


@router.get("/")
def home():
    return create_response(message="ZenZone API running", service=settings.SERVICE_NAME)


@router.get("/api-info")
def api_info():
    return create_response(
        message="API information",
        service=settings.PROJECT_NAME,
        docsUrl="/docs",
        openapiUrl="/openapi.json",
    )


@router.post("/api/init-db")
def init_db(database: Database = Depends(get_database)):
    try:
        database.create_all()
        return create_response(message="Database initialized successfully")
    except Exception as exc:
        return handle_exception(exc, "Database initialization failed")


@router.get("/api/test-db")
def test_db(database: Database = Depends(get_database)):
    try:
        info = database.ping()
        return create_response(message="Database connection successful", data=info)
    except Exception as exc:
        return handle_exception(exc, "Database connection failed")


@router.get("/api/admin/stats")
def dashboard_stats(db: Session = Depends(get_db)):
    try:
        return create_response(stats=get_dashboard_metrics(db))
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch dashboard stats")
