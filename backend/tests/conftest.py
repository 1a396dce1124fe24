from __future__ import annotations

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.orm import sessionmaker

from jobboard.auth import Actor, create_access_token, hash_password
from jobboard.database import Base, get_db, get_engine
from jobboard.dependencies import get_blob_store, get_notifier
from jobboard.main import app
from jobboard.models import (
    Application,
    ApplicationStatus,
    ApprovalStatus,
    Company,
    Job,
    JobSite,
    Qualification,
    RequiredSkill,
    Responsibility,
    Role,
    User,
)
from jobboard.services.blob_store import BlobStore
from jobboard.services.notifier import Notifier


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        super().__init__()
        self.sent: list[tuple[str, str]] = []
        self.fail = False

    def send(self, to: str, subject: str, html: str) -> None:
        if self.fail:
            raise RuntimeError("mail provider unavailable")
        self.sent.append((to, subject))


class FakeBlobStore(BlobStore):
    def __init__(self) -> None:
        self.uploaded: list[tuple[str, str]] = []
        self.deleted: list[str] = []
        self.fail_delete = False

    def upload(self, filename: str, content: bytes, content_type: str | None, kind: str) -> str:
        self.uploaded.append((filename, kind))
        return f"https://gateway.example.com/ipfs/cid-{len(self.uploaded)}"

    def delete(self, url: str) -> None:
        if self.fail_delete:
            raise RuntimeError("unpin failed")
        self.deleted.append(url)


class Factory:
    """Creates rows in their own committed sessions."""

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def user(self, role: Role = Role.JOB_SEEKER, email: str | None = None, study_area: list[str] | None = None) -> User:
        n = self._next()
        with self.session_factory() as db:
            user = User(
                name=f"User {n}",
                email=email or f"user{n}@example.com",
                password_hash=hash_password("secret123"),
                role=role.value,
                study_area=study_area or [],
            )
            db.add(user)
            db.commit()
            return user

    def company(self, status: ApprovalStatus = ApprovalStatus.APPROVED, logo: str = "") -> Company:
        n = self._next()
        with self.session_factory() as db:
            admin = User(
                name=f"Company {n}",
                email=f"company{n}@example.com",
                password_hash=hash_password("secret123"),
                role=Role.COMPANY_ADMIN.value,
            )
            company = Company(
                name=f"Company {n}",
                admin=admin,
                admin_email=admin.email,
                address="1 Main Street",
                logo=logo,
                status=status.value,
            )
            db.add(company)
            db.commit()
            company.admin  # noqa: B018
            return company

    def job(
        self,
        company: Company,
        status: ApprovalStatus = ApprovalStatus.APPROVED,
        area: str = "Engineering",
        title: str = "Backend Engineer",
    ) -> Job:
        with self.session_factory() as db:
            job = Job(
                title=title,
                company_id=company.id,
                area=area,
                location="Addis Ababa",
                deadline=date.today() + timedelta(days=30),
                site=JobSite.FULL_TIME.value,
                about_job="Build and run APIs.",
                status=status.value,
                qualifications=[Qualification(position=0, value="BSc in Computer Science")],
                responsibilities=[Responsibility(position=0, value="Write services")],
                required_skills=[RequiredSkill(position=0, value="Python")],
            )
            db.add(job)
            db.commit()
            return job

    def application(self, user: User, job: Job, status: ApplicationStatus = ApplicationStatus.PENDING) -> Application:
        with self.session_factory() as db:
            application = Application(
                user_id=user.id,
                job_id=job.id,
                full_name="Jane Doe",
                email=user.email,
                year_of_birth=1995,
                address="Bole Road",
                phone="+251900000000",
                profession="Engineer",
                career_level="Mid",
                cover_letter="I would like to join.",
                experiences=[
                    {"job_title": "Engineer", "company_name": "Other", "location": "Remote", "responsibilities": "APIs"}
                ],
                degree_type="BSc",
                institution="AAU",
                graduation_date=date(2018, 7, 1),
                skills=["Python"],
                certifications=[],
                languages=["English"],
                status=status.value,
            )
            db.add(application)
            db.commit()
            return application

    def actor(self, user: User, company: Company | None = None) -> Actor:
        return Actor(user_id=user.id, role=Role(user.role), company_id=company.id if company else None)

    def headers(self, user: User, company: Company | None = None) -> dict[str, str]:
        token = create_access_token(user.id, user.role, company.id if company else None)
        return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def session_factory(tmp_path):
    engine = get_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    yield TestSession
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fail_on_delete(db_session):
    """Make bulk DELETEs against the named table on ``db_session`` raise."""

    def arm(table: str) -> None:
        def handler(orm_execute_state):
            if orm_execute_state.is_delete and orm_execute_state.statement.table.name == table:
                raise RuntimeError(f"disk I/O error while deleting from {table}")

        event.listen(db_session, "do_orm_execute", handler)

    return arm


@pytest.fixture
def factory(session_factory):
    return Factory(session_factory)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def client(session_factory, notifier, blob_store):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    yield TestClient(app)
    app.dependency_overrides.clear()
