import os
from pathlib import Path
from urllib.parse import quote_plus

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent  # -> project root

# Load .env explicitly from project root
load_dotenv(BASE_DIR / ".env")

MEGABYTE = 1024 * 1024


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    user = quote_plus(os.getenv("DB_USER", "postgres"))
    password = quote_plus(os.getenv("DB_PASSWORD", ""))
    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "5432")
    name = os.getenv("DB_NAME", "zenzone")
    url = f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}"

    ca_cert = os.getenv("DB_SSL_ROOT_CERT")
    if ca_cert:
        url += f"?sslmode=verify-full&sslrootcert={quote_plus(ca_cert)}"
    return url


class Settings:
    PROJECT_NAME = "ZenZone Admin API"
    SERVICE_NAME = "zenzone-admin"

    DATABASE_URL = _database_url()
    DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", 20))
    DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", 0))
    # Seconds to wait for a pooled connection before giving up
    DB_POOL_TIMEOUT = float(os.getenv("DB_POOL_TIMEOUT", 2))
    # Seconds a connection may sit idle before it is recycled
    DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", 30))

    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

    SPACES_REGION = os.getenv("SPACES_REGION")
    SPACES_ENDPOINT = os.getenv("SPACES_ENDPOINT")
    SPACES_KEY = os.getenv("SPACES_KEY")
    SPACES_SECRET = os.getenv("SPACES_SECRET")
    SPACES_NAME = os.getenv("SPACES_NAME")
    SPACES_CDN_URL = (os.getenv("SPACES_CDN_URL") or "").rstrip("/")
    SPACES_BASE_PATH = (os.getenv("SPACES_BASE_PATH") or "zenzone").strip("/")
    IMAGE_UPLOAD_MAX_BYTES = int(os.getenv("IMAGE_UPLOAD_MAX_BYTES", 4 * MEGABYTE))
    AUDIO_UPLOAD_MAX_BYTES = int(os.getenv("AUDIO_UPLOAD_MAX_BYTES", 8 * MEGABYTE))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    SEED_ON_STARTUP = os.getenv("SEED_ON_STARTUP", "true").lower() == "true"
    SEED_ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@zenzone.app")
    SEED_ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "change-me-please")
    SEED_ADMIN_NAME = os.getenv("SEED_ADMIN_NAME", "ZenZone Admin")

    cors_origins = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]


settings = Settings()
