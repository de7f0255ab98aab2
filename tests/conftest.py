"""Shared fixtures: an in-memory database behind the FastAPI app."""

import os

# Settings are read at import time; keep every integration unconfigured
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEFAULT_TIMEZONE"] = "UTC"
for _key in (
    "GEMINI_API_KEY",
    "RESEND_API_KEY",
    "AIRTABLE_API_KEY",
    "AIRTABLE_BASE_ID",
    "AIRTABLE_TABLE_NAME",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
):
    os.environ[_key] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import dayflow.models  # noqa: F401
from dayflow.core.config import Base, get_db
from dayflow.core.security import create_access_token
from dayflow.crud.user import crud_user
from dayflow.schemas.user import SignupRequest
from main import app

PASSWORD = "Sunrise2024"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make(email="ada@dayflow.app", timezone="UTC", **fields):
        user = crud_user.create(
            db,
            obj_in=SignupRequest(email=email, password=PASSWORD, timezone=timezone),
            default_timezone="UTC",
        )
        for name, value in fields.items():
            setattr(user, name, value)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def user(make_user):
    return make_user(display_name="Ada")


def headers_for(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


@pytest.fixture
def auth_headers(user):
    return headers_for(user)


@pytest.fixture
def make_headers():
    return headers_for
