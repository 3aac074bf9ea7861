"""Shared fixtures: an in-memory store, seeded callers and an HTTP client."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from jobboard.auth import create_access_token
from jobboard.config import Settings
from jobboard.database import Base, build_engine, build_session_factory
from jobboard.main import create_app
from jobboard.models import Company, Job, Resume, User
from jobboard.models.enums import JobStatus, JobType, ResumeStatus, ResumeVisibility, Role
from jobboard.services.guard import Caller


TEST_SECRET = "test-auth-secret"
IDENTITY_SECRET = "test-identity-secret"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        log_level="WARNING",
        owner_open_id="owner-open-id",
        auth_secret=TEST_SECRET,
        auth_token_ttl_seconds=3600,
        identity_shared_secret=IDENTITY_SECRET,
    )


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


def _user(db: Session, open_id: str, role: Role) -> User:
    user = User(open_id=open_id, name=open_id.title(), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db) -> User:
    return _user(db, "admin", Role.ADMIN)


@pytest.fixture
def recruiter_user(db) -> User:
    return _user(db, "recruiter", Role.RECRUITER)


@pytest.fixture
def other_recruiter_user(db) -> User:
    return _user(db, "other-recruiter", Role.RECRUITER)


@pytest.fixture
def seeker_user(db) -> User:
    return _user(db, "seeker", Role.JOB_SEEKER)


@pytest.fixture
def other_seeker_user(db) -> User:
    return _user(db, "other-seeker", Role.JOB_SEEKER)


def as_caller(user: User) -> Caller:
    return Caller(id=user.id, role=Role(user.role))


@pytest.fixture
def admin(admin_user) -> Caller:
    return as_caller(admin_user)


@pytest.fixture
def recruiter(recruiter_user) -> Caller:
    return as_caller(recruiter_user)


@pytest.fixture
def other_recruiter(other_recruiter_user) -> Caller:
    return as_caller(other_recruiter_user)


@pytest.fixture
def seeker(seeker_user) -> Caller:
    return as_caller(seeker_user)


@pytest.fixture
def other_seeker(other_seeker_user) -> Caller:
    return as_caller(other_seeker_user)


@pytest.fixture
def company(db, recruiter_user) -> Company:
    row = Company(recruiter_id=recruiter_user.id, name="Harbour Outfitters", location="Lisbon")
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def add_job(
    db: Session,
    company: Company,
    *,
    title: str = "Kitesurf Instructor",
    description: str = "Teach kitesurfing on the coast",
    location: str | None = "Lisbon, Portugal",
    job_type: JobType = JobType.SEASONAL,
    status: JobStatus = JobStatus.ACTIVE,
    is_featured: bool = False,
    created_at: datetime | None = None,
    skills: list[str] | None = None,
) -> Job:
    job = Job(
        company_id=company.id,
        recruiter_id=company.recruiter_id,
        title=title,
        description=description,
        location=location,
        job_type=job_type,
        status=status,
        is_featured=is_featured,
        skills=skills,
    )
    if created_at is not None:
        job.created_at = created_at
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def add_resume(
    db: Session,
    user: User,
    *,
    headline: str = "Certified kitesurf instructor",
    summary: str | None = "Five seasons of coaching",
    location: str | None = "Lisbon",
    skills: list[str] | None = None,
    visibility: ResumeVisibility = ResumeVisibility.PUBLIC,
    status: ResumeStatus = ResumeStatus.ACTIVE,
    is_premium: bool = False,
    updated_at: datetime | None = None,
) -> Resume:
    resume = Resume(
        user_id=user.id,
        headline=headline,
        summary=summary,
        location=location,
        skills=skills,
        visibility=visibility,
        status=status,
        is_premium=is_premium,
    )
    if updated_at is not None:
        resume.updated_at = updated_at
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return resume


def minutes_ago(minutes: int) -> datetime:
    return datetime(2026, 1, 1, 12, 0, 0) - timedelta(minutes=minutes)


@pytest.fixture
def client(settings, engine):
    app = create_app(settings, engine=engine)
    with TestClient(app) as test_client:
        yield test_client


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id, TEST_SECRET, 3600)
    return {"Authorization": f"Bearer {token}"}
