import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.core.config import settings
from app.core.security import create_access_token
from app.db.session import get_session
from app.main import app
from app.models import AdminRole
from app.services.auth import AuthService

ADMIN_EMAIL = "admin@rapatin.id"
ADMIN_PASSWORD = "rahasia123"


def make_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture(name="session")
def session_fixture():
    engine = make_engine()
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="broken_session")
def broken_session_fixture():
    # No tables: every query fails like an unreachable backend would
    engine = make_engine()
    with Session(engine) as session:
        yield session


@pytest.fixture(autouse=True)
def url_cache_path(tmp_path, monkeypatch):
    path = tmp_path / "url_data.json"
    monkeypatch.setattr(settings, "URL_CACHE_PATH", str(path))
    return path


def make_client(session):
    app.dependency_overrides[get_session] = lambda: session
    return TestClient(app)


@pytest.fixture(name="client")
def client_fixture(session):
    yield make_client(session)
    app.dependency_overrides.clear()


@pytest.fixture(name="broken_client")
def broken_client_fixture(broken_session):
    yield make_client(broken_session)
    app.dependency_overrides.clear()


@pytest.fixture
def create_admin(session):
    def _create_admin(email=ADMIN_EMAIL, role=AdminRole.CONTENT_MANAGER, permissions=None):
        AuthService(session).create_admin(email, ADMIN_PASSWORD, name="Admin", role=role, permissions=permissions)
        token = create_access_token({"sub": email})
        return {"Authorization": f"Bearer {token}"}
    return _create_admin


@pytest.fixture
def admin_headers(create_admin):
    return create_admin()
