"""Shared fixtures for benchmark tests."""

import uuid
import pytest
from sqlmodel import Session

from app.models.enums import UserRole
from app.models.user import User
from app.models.verification import DocumentUpload


# Session and mock_storage come from the root conftest.py


@pytest.fixture(name="employer_factory")
def employer_factory_fixture(session: Session):
    """
    Create a factory that persists a new employer with a unique email on each call.

    The password hash is a placeholder: benchmarks never log these users in.
    """

    def create() -> User:
        unique = uuid.uuid4().hex[:8]
        user = User(
            name=f"Bench Employer {unique}",
            email=f"bench_{unique}@example.com",
            role=UserRole.EMPLOYER,
            hashed_password="not-a-hash",
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return create


@pytest.fixture(name="bench_upload")
def bench_upload_fixture() -> DocumentUpload:
    return DocumentUpload(
        data=b"%PDF-1.4 " + b"0" * 4096,
        filename="bench.pdf",
        content_type="application/pdf",
    )
