from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from placement_portal.config import settings
from placement_portal.database import get_db, get_engine, init_db
from placement_portal.main import app


@pytest.fixture
def tmp_data(tmp_path):
    data_path = tmp_path / "PortalData"
    (data_path / "uploads").mkdir(parents=True)
    original = settings.data_path
    settings.data_path = data_path
    yield data_path
    settings.data_path = original


@pytest.fixture
def test_db(tmp_data):
    db_path = tmp_data / "portal.sqlite"
    init_db(db_path)
    engine = get_engine(db_path)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def client(test_db):
    return TestClient(app)


def future_deadline(days: int = 30) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def past_deadline(days: int = 1) -> str:
    return (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()


class PortalClient:
    """Small helper around TestClient for registering users and posting jobs."""

    def __init__(self, client):
        self.client = client
        self._counter = 0

    def register(self, role="student", **overrides):
        self._counter += 1
        payload = {
            "email": f"{role}{self._counter}@college.edu",
            "password": "password123",
            "first_name": role.title(),
            "last_name": f"User{self._counter}",
            "role": role,
            "department": "Computer Science",
        }
        payload.update(overrides)
        r = self.client.post("/api/auth/register", json=payload)
        assert r.status_code == 201, r.text
        data = r.json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}

    def post_job(self, headers, **overrides):
        payload = {
            "title": "Software Engineer",
            "company": "TechCorp",
            "location": "Bangalore",
            "type": "full-time",
            "description": "Build backend services.",
            "skills": ["Python"],
            "deadline": future_deadline(),
        }
        payload.update(overrides)
        r = self.client.post("/api/jobs", json=payload, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()

    def upload_resume(self, headers, name="resume.pdf", content=b"%PDF-1.4 resume", is_default=False):
        return self.client.post(
            "/api/resumes",
            files={"resume": (name, content, "application/pdf")},
            data={"is_default": "true" if is_default else "false"},
            headers=headers,
        )


@pytest.fixture
def portal(client):
    return PortalClient(client)
