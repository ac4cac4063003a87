"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- Seeded companies and jobs
- FastAPI test client
- Admin and non-admin bearer tokens
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.core.database import Base, get_db
from jobboard.core.security import create_user_token
from jobboard.models import Company, Job
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def enable_foreign_keys(dbapi_connection, connection_record):
    """SQLite only enforces foreign keys (and ON DELETE CASCADE) when asked to."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test and drop it afterwards.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_db(db_session):
    """
    Companies c1..c3 and jobs j1..j3.

    Returns a dict mapping job title to its id.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db_session.flush()

    jobs = [
        Job(title="j1", salary=1000, equity=Decimal("0.01"), company_handle="c1"),
        Job(title="j2", salary=2000, equity=Decimal("0.02"), company_handle="c2"),
        Job(title="j3", salary=3000, equity=Decimal("0.03"), company_handle="c2"),
    ]
    db_session.add_all(jobs)
    db_session.commit()

    return {job.title: job.id for job in jobs}


@pytest.fixture
def db_engine():
    """The in-memory engine every test session is bound to"""
    return engine


@pytest.fixture
def client(db_session, db_engine, monkeypatch):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    # Startup runs init_db() against the test engine instead of Postgres
    monkeypatch.setattr("jobboard.core.database.engine", db_engine)
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    """Authorization header for an admin user"""
    return {"Authorization": f"Bearer {create_user_token('admin', is_admin=True)}"}


@pytest.fixture
def user_headers():
    """Authorization header for a regular (non-admin) user"""
    return {"Authorization": f"Bearer {create_user_token('u1', is_admin=False)}"}


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "title": "New",
        "salary": 1001,
        "equity": "0.1",
        "companyHandle": "c3",
    }
