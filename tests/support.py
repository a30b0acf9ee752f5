"""Shared test setup: forces a throwaway SQLite database before any app module is imported."""

import os
import tempfile
from pathlib import Path

TEST_DB_PATH = Path(tempfile.gettempdir()) / "poseidon_test.db"
if TEST_DB_PATH.exists():
    TEST_DB_PATH.unlink()

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["APP_ENV"] = "dev"
os.environ["SEED_DEFAULT_USERS"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SESSION_IDLE_MINUTES"] = "30"
os.environ["SESSION_COOKIE_SECURE"] = "false"

from fastapi.testclient import TestClient

from poseidon.core.database import SessionLocal, engine
from poseidon.main import app
from poseidon.models import Base
from poseidon.services.user_service import UserService

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "AdminPass123!"
USER_USERNAME = "trader"
USER_PASSWORD = "TraderPass123!"


def reset_database() -> None:
    """Recreate every table and drop all live sessions."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    app.state.session_registry.clear()


def seed_accounts() -> None:
    """One ADMIN and one USER account."""
    service = UserService(app.state.password_hasher)
    db = SessionLocal()
    try:
        service.create_with_password(db, ADMIN_USERNAME, ADMIN_PASSWORD, "Administrator", "ADMIN")
        service.create_with_password(db, USER_USERNAME, USER_PASSWORD, "Trader One", "USER")
    finally:
        db.close()


def make_client() -> TestClient:
    return TestClient(app, follow_redirects=False)


def login(client: TestClient, username: str, password: str):
    return client.post("/login", data={"username": username, "password": password})


def login_as_admin() -> TestClient:
    client = make_client()
    login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
    return client


def login_as_user() -> TestClient:
    client = make_client()
    login(client, USER_USERNAME, USER_PASSWORD)
    return client
