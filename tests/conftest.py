"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite, fresh tables per test)
- FastAPI test client
- Seed data: companies c1-c3, jobs j1-j3, users u1 (admin), u2, u3
- Bearer tokens for the seeded users
"""

import os

# Must be set before app settings are first built
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SECRET_KEY", "secret-test")
os.environ.setdefault("JSON_LOGS", "false")
# Use in-memory SQLite for testing (fast, isolated)
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event

from app.core.database import Base, SessionLocal as TestingSessionLocal, engine, get_db, run_query
from app.core.security import create_token, get_password_hash
from app.models import Company, User, Application
from main import app


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY / ON DELETE CASCADE unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
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
def seed(db_session):
    """
    Insert the common test rows. Returns {"jobs": {title: id}}.

    u2 has applied to j1 and j2; u1 and u3 have no applications.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
        User(username="u1", password=get_password_hash("password1"), first_name="U1F",
             last_name="U1L", email="u1@email.com", is_admin=True),
        User(username="u2", password=get_password_hash("password2"), first_name="U2F",
             last_name="U2L", email="u2@email.com", is_admin=False),
        User(username="u3", password=get_password_hash("password3"), first_name="U3F",
             last_name="U3L", email="u3@email.com", is_admin=False),
    ])
    db_session.commit()

    job_ids = {}
    for title, salary, equity, handle in [
        ("j1", 1, "0", "c1"),
        ("j2", 2, "0.2", "c2"),
        ("j3", 3, "0.3", "c3"),
    ]:
        rows = run_query(
            db_session,
            "INSERT INTO jobs (title, salary, equity, company_handle) VALUES ($1, $2, $3, $4) RETURNING id",
            [title, salary, equity, handle],
        )
        job_ids[title] = rows[0]["id"]
    db_session.commit()

    db_session.add_all([
        Application(username="u2", job_id=job_ids["j1"]),
        Application(username="u2", job_id=job_ids["j2"]),
    ])
    db_session.commit()

    return {"jobs": job_ids}


@pytest.fixture
def admin_headers():
    """u1 is the admin"""
    return {"Authorization": f"Bearer {create_token({'username': 'u1', 'isAdmin': True})}"}


@pytest.fixture
def u2_headers():
    return {"Authorization": f"Bearer {create_token({'username': 'u2', 'isAdmin': False})}"}


@pytest.fixture
def u3_headers():
    return {"Authorization": f"Bearer {create_token({'username': 'u3', 'isAdmin': False})}"}
