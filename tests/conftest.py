import os

# Settings are read at import time by the engine and the storage singleton
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only-min-32-chars")
os.environ.setdefault("MINIO_ENDPOINT", "localhost:9000")
os.environ.setdefault("MINIO_ACCESS_KEY", "test-access-key")
os.environ.setdefault("MINIO_SECRET_KEY", "test-secret-key")

import pytest  # noqa: E402
from unittest.mock import MagicMock, patch  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.password import get_password_hash  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.database.database import get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.models.enums import UserRole  # noqa: E402
from app.models.user import User  # noqa: E402
from app.models import verification, notification  # noqa: E402, F401

TEST_PASSWORD = "Password123"


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite engine shared by every connection of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    """Provide a test database session."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """TestClient whose requests use the test session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="mock_storage")
def mock_storage_fixture():
    """
    Replace the MinIO-backed storage singleton's operations.

    Each upload returns a distinct key so replacement logic can be observed.
    """
    counter = {"n": 0}

    def _upload(file_data, file_name, content_type, size=-1, owner_id=None):
        counter["n"] += 1
        return f"{owner_id}/key{counter['n']}_{file_name}"

    with (
        patch("app.services.storage.storage_service.upload_file") as upload_file,
        patch("app.services.storage.storage_service.delete_file") as delete_file,
        patch("app.services.storage.storage_service.open_stream") as open_stream,
        patch(
            "app.services.storage.storage_service.get_presigned_url"
        ) as get_presigned_url,
    ):
        upload_file.side_effect = _upload
        delete_file.return_value = True
        open_stream.return_value = iter([b"%PDF-1.4 ", b"fake document"])
        get_presigned_url.return_value = "http://minio:9000/signed"
        storage = MagicMock()
        storage.upload_file = upload_file
        storage.delete_file = delete_file
        storage.open_stream = open_stream
        storage.get_presigned_url = get_presigned_url
        yield storage


def _make_user(session: Session, name: str, email: str, role: UserRole) -> User:
    user = User(
        name=name,
        email=email,
        role=role,
        hashed_password=get_password_hash(TEST_PASSWORD),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="employer_user")
def employer_user_fixture(session: Session) -> User:
    return _make_user(session, "Acme Corp", "hr@acme.com", UserRole.EMPLOYER)


@pytest.fixture(name="other_employer_user")
def other_employer_user_fixture(session: Session) -> User:
    return _make_user(session, "Globex", "jobs@globex.com", UserRole.EMPLOYER)


@pytest.fixture(name="jobseeker_user")
def jobseeker_user_fixture(session: Session) -> User:
    return _make_user(session, "Jane Seeker", "jane@example.com", UserRole.JOBSEEKER)


@pytest.fixture(name="admin_user")
def admin_user_fixture(session: Session) -> User:
    return _make_user(session, "Platform Admin", "admin@example.com", UserRole.ADMIN)


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header carrying a fresh access token for `user`."""
    token = create_access_token(data={"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="headers_for")
def headers_for_fixture():
    """Build auth headers for any user created inside a test."""
    return auth_headers


@pytest.fixture(name="employer_headers")
def employer_headers_fixture(employer_user: User) -> dict[str, str]:
    return auth_headers(employer_user)


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(admin_user: User) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture(name="jobseeker_headers")
def jobseeker_headers_fixture(jobseeker_user: User) -> dict[str, str]:
    return auth_headers(jobseeker_user)
