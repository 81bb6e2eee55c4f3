"""Shared fixtures for service tests."""

import pytest
from sqlmodel import Session

from app.models.user import User
from app.models.verification import DocumentUpload, EmployerVerification
from app.services import verification as verification_service


# Session, users and mock_storage come from the root conftest.py

PDF_BYTES = b"%PDF-1.4 test document"


@pytest.fixture(name="pdf_upload")
def pdf_upload_fixture() -> DocumentUpload:
    """A small, valid PDF upload."""
    return DocumentUpload(
        data=PDF_BYTES, filename="registration.pdf", content_type="application/pdf"
    )


@pytest.fixture(name="submitted_verification")
def submitted_verification_fixture(
    session: Session, employer_user: User, pdf_upload: DocumentUpload, mock_storage
) -> EmployerVerification:
    """Employer with one pending submission."""
    assert employer_user.id_user is not None
    verification_service.submit_or_replace(session, employer_user.id_user, pdf_upload)
    record = verification_service.get_verification_by_employer(
        session, employer_user.id_user
    )
    assert record is not None
    return record
