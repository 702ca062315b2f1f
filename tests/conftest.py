import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]
TEST_DB_PATH = Path(tempfile.gettempdir()) / "zenzone-admin-test.db"

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SEED_ON_STARTUP"] = "false"
# Cheapest bcrypt cost keeps the auth tests fast
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("SPACES_NAME", "zenzone-test")
os.environ.setdefault("SPACES_CDN_URL", "https://cdn.example.test")

import app.main as main  # noqa: E402  (import after env vars are set)


@pytest.fixture()
def client():
    """Provide a TestClient over freshly created tables."""
    main.app.state.database.drop_all()
    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture()
def db_session(client):
    session = main.app.state.database.session()
    try:
        yield session
    finally:
        session.close()
