"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Accounts of each role and their bearer tokens
- A job posting owned by an employer
"""

import os

# Settings are read at import time, so configure them before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("JSON_LOGS", "false")

import uuid
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token, get_password_hash
from app.models.job_post import JobPost
from app.models.user import User, UserRole
from main import app

DEFAULT_PASSWORD = "TestPass123!"

# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    All tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory that stores an account with the given role."""
    def _make_user(role: UserRole = UserRole.USER, email: str = None,
                   password: str = DEFAULT_PASSWORD, username: str = None) -> User:
        suffix = uuid.uuid4().hex[:8]
        user = User(
            email=email or f"{role.value.lower()}_{suffix}@example.com",
            username=username or f"{role.value.lower()}_{suffix}",
            hashed_password=get_password_hash(password),
            role=role
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    """Build an Authorization header carrying a token for the given account."""
    def _auth_headers(user: User, expires_delta: timedelta = None) -> dict:
        token = create_access_token(subject=user.email, expires_delta=expires_delta)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def employer(make_user):
    return make_user(UserRole.EMPLOYER, email="employer@example.com", username="Acme Hiring")


@pytest.fixture
def other_employer(make_user):
    return make_user(UserRole.EMPLOYER, email="rival@example.com", username="Rival Corp")


@pytest.fixture
def job_seeker(make_user):
    return make_user(UserRole.USER, email="seeker@example.com", username="Jane Seeker")


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, email="admin@example.com", username="Site Admin")


@pytest.fixture
def sample_job_data():
    """Sample job posting data for testing"""
    return {
        "title": "Senior Python Developer",
        "description": "We are looking for a Senior Python Developer with 5+ years of experience.",
        "location": "San Francisco, CA (Remote)",
        "skills": "Python, FastAPI, PostgreSQL",
        "salary": 150000.0
    }


@pytest.fixture
def job_post(db_session, employer, sample_job_data):
    """A job posting owned by the `employer` fixture."""
    post = JobPost(employer_id=employer.id, **sample_job_data)
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post
