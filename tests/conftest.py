"""
Shared fixtures: an app wired to a throwaway SQLite database and upload folder.
"""
import io

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from crowdfund.core.config import Settings
from crowdfund.core.database import get_db, init_db
from crowdfund.main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite://",
        secret_key=TEST_SECRET,
        upload_dir=str(tmp_path / "uploads"),
        environment="test",
    )


def _build_client(settings, engine):
    init_db(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app = create_app(settings)
    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app), TestingSessionLocal


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def client_and_session(settings, engine):
    return _build_client(settings, engine)


@pytest.fixture
def client(client_and_session):
    return client_and_session[0]


@pytest.fixture
def db_session(client_and_session):
    session = client_and_session[1]()
    yield session
    session.close()


@pytest.fixture
def file_db_client(settings, tmp_path):
    """Client backed by an on-disk database, so concurrent requests get separate connections"""
    file_settings = settings.model_copy(update={"database_url": f"sqlite:///{tmp_path / 'crowdfund.db'}"})
    with TestClient(create_app(file_settings)) as client:
        yield client


@pytest.fixture
def project_fields():
    return {
        "projectId": "AB12",
        "name": "Test",
        "details": "x",
        "email": "a@b.com",
        "phone": "9999999999",
        "upiId": "a@hdfc",
        "fundingGoal": "5000",
    }


@pytest.fixture
def image_file():
    """Factory for a fresh multipart image payload"""
    def make(filename="cover.png"):
        return {"image": (filename, io.BytesIO(b"\x89PNG\r\n\x1a\nfake-image"), "image/png")}
    return make


@pytest.fixture
def upload_project(client, project_fields, image_file):
    def upload(**overrides):
        data = {**project_fields, **overrides}
        return client.post("/api/projects/upload", data=data, files=image_file())
    return upload
