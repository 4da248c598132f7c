"""
Shared fixtures: a fresh in-memory SQLite database per test, a TestClient with
get_db overridden, and a small cast of users.

    admin
    recruiter   manages contractor1
    recruiter2  manages contractor2
    contractor1
    contractor2
"""
import os

# Keep the app's own engine off any real database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.database import Base, get_db
from app.main import app
from app.models.enums import TimesheetStatus, UserRole
from app.models.timesheet import Timesheet
from app.models.user import User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def users(db):
    """Creates the cast and returns their ids by name."""
    admin = User(email="admin@example.com", first_name="Admin", last_name="User", role=UserRole.ADMIN)
    contractor1 = User(email="c1@example.com", first_name="John", last_name="Contractor", role=UserRole.CONTRACTOR)
    contractor2 = User(email="c2@example.com", first_name="Alice", last_name="Developer", role=UserRole.CONTRACTOR)
    recruiter = User(email="recruiter@example.com", first_name="Jane", last_name="Recruiter", role=UserRole.RECRUITER)
    recruiter2 = User(email="recruiter2@example.com", first_name="Bob", last_name="Hiring", role=UserRole.RECRUITER)
    recruiter.managed_contractors = [contractor1]
    recruiter2.managed_contractors = [contractor2]

    db.add_all([admin, contractor1, contractor2, recruiter, recruiter2])
    db.commit()
    return {
        "admin": admin.id,
        "recruiter": recruiter.id,
        "recruiter2": recruiter2.id,
        "contractor1": contractor1.id,
        "contractor2": contractor2.id,
    }


@pytest.fixture
def auth_headers(db, users):
    """auth_headers("contractor1") -> bearer header for that user."""
    def _headers(name: str) -> dict:
        user = db.get(User, users[name])
        token = create_access_token(user_id=user.id, email=user.email, role=user.role.value)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_timesheet(db):
    """Inserts a timesheet directly, bypassing the service layer."""
    def _make(contractor_id: int, start=date(2024, 1, 1), end=date(2024, 1, 7), **fields) -> int:
        timesheet = Timesheet(
            contractor_id=contractor_id,
            project_name=fields.pop("project_name", "Website"),
            hours_worked=fields.pop("hours_worked", Decimal("40")),
            week_start_date=start,
            week_end_date=end,
            status=fields.pop("status", TimesheetStatus.PENDING),
            **fields,
        )
        db.add(timesheet)
        db.commit()
        return timesheet.id
    return _make
