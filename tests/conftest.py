import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("EMAIL_ENABLED", "false")

from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import recruitment.models  # noqa: F401
from recruitment.core.rate_limiter import rate_limiter
from recruitment.database import Base, get_db
from recruitment.dependencies import get_current_user
from recruitment.main import app


@dataclass
class StubUser:
    id: str = "user-1"
    email: str = "applicant@example.com"
    first_name: str = "Jane"
    last_name: str = "Banda"
    role: str = "APPLICANT"
    position: str | None = None
    is_active: bool = True
    password_hash: str = "hashed-password"
    created_at: datetime = field(default_factory=lambda: datetime(2026, 1, 5, tzinfo=timezone.utc))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@pytest.fixture
def applicant_user() -> StubUser:
    return StubUser()


@pytest.fixture
def hr_user() -> StubUser:
    return StubUser(id="hr-1", email="hr@example.com", first_name="Hope", last_name="Phiri", role="HR")


@pytest.fixture
def admin_user() -> StubUser:
    return StubUser(id="admin-1", email="admin@example.com", first_name="Ada", last_name="Mwale", role="ADMIN")


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


class _OverrideClient(TestClient):
    """Re-applies this client's own overrides on each request, so several
    clients built from the shared app in one test don't clobber each other."""

    def __init__(self, app, user, db_override):
        super().__init__(app)
        self._user = user
        self._db_override = db_override

    def _apply_overrides(self):
        self.app.dependency_overrides[get_db] = self._db_override
        if self._user is not None:
            user = self._user
            self.app.dependency_overrides[get_current_user] = lambda: user
        else:
            self.app.dependency_overrides.pop(get_current_user, None)

    def request(self, *args, **kwargs):
        self._apply_overrides()
        return super().request(*args, **kwargs)


def _client_as(user):
    def _db_override():
        yield object()

    client = _OverrideClient(app, user, _db_override)
    client._apply_overrides()
    return client


@pytest.fixture
def client(applicant_user: StubUser):
    yield _client_as(applicant_user)
    app.dependency_overrides.clear()


@pytest.fixture
def hr_client(hr_user: StubUser):
    yield _client_as(hr_user)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(admin_user: StubUser):
    yield _client_as(admin_user)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    """No current-user override: the real bearer-token dependency runs."""
    yield _client_as(None)
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Fresh in-memory SQLite database with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    from recruitment.config import settings

    monkeypatch.setattr(settings, "upload_dir", str(tmp_path / "uploads"))
    return tmp_path / "uploads"


@pytest.fixture
def db_client(db_session):
    """TestClient bound to the SQLite session. Use `login_as(user)` to pick the caller."""

    def _db_override():
        yield db_session

    app.dependency_overrides[get_db] = _db_override
    test_client = TestClient(app)

    def login_as(user):
        app.dependency_overrides[get_current_user] = lambda: user
        return test_client

    test_client.login_as = login_as
    yield test_client
    app.dependency_overrides.clear()


class Factory:
    """Builds rows directly in the SQLite session."""

    def __init__(self, db):
        self.db = db
        self._n = 0

    def _next(self) -> int:
        self._n += 1
        return self._n

    def user(self, role="APPLICANT", email=None, first_name="Jane", last_name="Banda", is_active=True):
        from recruitment.core.security import generate_id
        from recruitment.models.user import User

        n = self._next()
        user = User(
            id=generate_id(),
            email=email or f"user{n}@example.com",
            password_hash="not-a-real-hash",
            first_name=first_name,
            last_name=last_name,
            role=role,
            is_active=is_active,
        )
        self.db.add(user)
        self.db.commit()
        return user

    def references(self) -> dict:
        from recruitment.core.security import generate_id
        from recruitment.models.reference import Department, EducationLevel, EmploymentType, ExperienceLevel

        n = self._next()
        rows = {
            "department_id": Department(id=generate_id(), name=f"Finance {n}", is_active=True),
            "employment_type_id": EmploymentType(id=generate_id(), name=f"Full Time {n}", is_active=True),
            "education_level_id": EducationLevel(id=generate_id(), name=f"Bachelor's Degree {n}", is_active=True),
            "experience_level_id": ExperienceLevel(
                id=generate_id(), level_id=f"mid{n}", label="Mid Level", year_range="3-5 years", is_active=True
            ),
        }
        self.db.add_all(rows.values())
        self.db.commit()
        return {key: row.id for key, row in rows.items()}

    def job(self, refs=None, *, title="Accountant", closing_date=None, is_active=True, posted_by=None):
        from datetime import date, timedelta

        from recruitment.core.security import generate_id
        from recruitment.models.job import Job

        refs = refs or self.references()
        job = Job(
            id=generate_id(),
            title=title,
            location="Lilongwe, Malawi",
            closing_date=closing_date or date.today() + timedelta(days=14),
            description="D" * 120,
            responsibilities=["Prepare reports"],
            qualifications=["ACCA"],
            skills=["Excel"],
            terms_and_conditions="T" * 60,
            posted_by=posted_by,
            is_active=is_active,
            **refs,
        )
        self.db.add(job)
        self.db.commit()
        return job

    def complete_profile(self, user):
        from datetime import date

        from recruitment.core.security import generate_id
        from recruitment.models.profile import ApplicantProfile, Education, Experience, Skill

        self.db.add(
            ApplicantProfile(
                id=generate_id(), user_id=user.id, phone="+265 999 123 456", date_of_birth=date(1995, 3, 1), gender="female"
            )
        )
        self.db.add(
            Education(
                id=generate_id(),
                user_id=user.id,
                degree="BSc Accounting",
                school="LUANAR",
                location="Lilongwe",
                graduation_year="2018",
            )
        )
        self.db.add(
            Experience(
                id=generate_id(),
                user_id=user.id,
                title="Accounts Clerk",
                company="ESCOM",
                location="Blantyre",
                start_date=date(2019, 1, 1),
            )
        )
        skill = Skill(id=generate_id(), name=f"Bookkeeping {self._next()}")
        self.db.add(skill)
        user.skills.append(skill)
        self.db.commit()
        return user

    def application(self, job, applicant, status="pending", score=75.5):
        from recruitment.core.security import generate_id
        from recruitment.models.application import JobApplication

        application = JobApplication(
            id=generate_id(), job_id=job.id, applicant_id=applicant.id, status=status, score=score, is_active=True
        )
        self.db.add(application)
        self.db.commit()
        return application


@pytest.fixture
def factory(db_session) -> Factory:
    return Factory(db_session)
