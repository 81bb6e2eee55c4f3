"""Tests for employer verification endpoints."""

from fastapi.testclient import TestClient
from sqlmodel import Session

from app.models.enums import VerificationStatus
from app.models.user import User
from app.services import verification as verification_service

TEST_FILE_CONTENT = b"%PDF-1.4 fake pdf content"
TEST_FILE_NAME = "registration.pdf"


def _upload(client: TestClient, headers, path="/verification/upload", **kwargs):
    files = kwargs.pop(
        "files", {"document": (TEST_FILE_NAME, TEST_FILE_CONTENT, "application/pdf")}
    )
    return client.post(path, headers=headers, files=files, **kwargs)


class TestReadMyVerification:
    def test_unverified_without_submission(
        self, client: TestClient, employer_headers
    ):
        response = client.get("/verification/me", headers=employer_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "unverified"
        assert data["userVerificationStatus"] == "under review"
        assert data["isVerified"] is False
        assert data["note"] == ""
        assert data["submittedAt"] is None
        assert data["documentUrl"] == ""

    def test_after_upload(self, client: TestClient, employer_headers, mock_storage):
        _upload(client, employer_headers)

        data = client.get("/verification/me", headers=employer_headers).json()

        assert data["status"] == "pending"
        assert data["submittedAt"] is not None
        assert data["documentUrl"] == "http://minio:9000/signed"

    def test_requires_authentication(self, client: TestClient):
        response = client.get("/verification/me")
        assert response.status_code == 401

    def test_rejects_invalid_token(self, client: TestClient):
        response = client.get(
            "/verification/me", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_forbidden_for_jobseeker(self, client: TestClient, jobseeker_headers):
        response = client.get("/verification/me", headers=jobseeker_headers)
        assert response.status_code == 403

    def test_forbidden_for_admin(self, client: TestClient, admin_headers):
        response = client.get("/verification/me", headers=admin_headers)
        assert response.status_code == 403


class TestUpload:
    def test_upload_success(
        self,
        client: TestClient,
        session: Session,
        employer_user: User,
        employer_headers,
        mock_storage,
    ):
        response = _upload(client, employer_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Uploaded. Pending review."}
        record = verification_service.get_verification_by_employer(
            session, employer_user.id_user  # type: ignore
        )
        assert record is not None
        assert record.status == VerificationStatus.PENDING
        assert record.size_bytes == len(TEST_FILE_CONTENT)
        mock_storage.upload_file.assert_called_once()

    def test_upload_alias_with_document_url(
        self,
        client: TestClient,
        session: Session,
        employer_user: User,
        employer_headers,
        mock_storage,
    ):
        response = _upload(
            client,
            employer_headers,
            path="/verification",
            data={"documentUrl": "https://cdn.example.com/kbis.pdf"},
        )

        assert response.status_code == 200
        record = verification_service.get_verification_by_employer(
            session, employer_user.id_user  # type: ignore
        )
        assert record is not None
        assert record.document_url == "https://cdn.example.com/kbis.pdf"

    def test_upload_without_file(self, client: TestClient, employer_headers, mock_storage):
        response = client.post(
            "/verification/upload",
            headers=employer_headers,
            data={"documentUrl": "https://cdn.example.com/kbis.pdf"},
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "No file uploaded.", "field": "document"}
        mock_storage.upload_file.assert_not_called()

    def test_upload_wrong_type(self, client: TestClient, employer_headers, mock_storage):
        response = _upload(
            client,
            employer_headers,
            files={"document": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert "Only PDF, JPG, JPEG, PNG" in response.json()["detail"]
        mock_storage.upload_file.assert_not_called()

    def test_upload_empty_file(self, client: TestClient, employer_headers, mock_storage):
        response = _upload(
            client,
            employer_headers,
            files={"document": ("empty.pdf", b"", "application/pdf")},
        )

        assert response.status_code == 400

    def test_resubmission_replaces_previous(
        self,
        client: TestClient,
        session: Session,
        employer_user: User,
        employer_headers,
        mock_storage,
    ):
        _upload(client, employer_headers)
        first = verification_service.get_verification_by_employer(
            session, employer_user.id_user  # type: ignore
        )
        assert first is not None
        first_key = first.storage_key

        response = _upload(
            client,
            employer_headers,
            files={"document": ("kbis.jpg", b"\xff\xd8 jpeg", "image/jpeg")},
        )

        assert response.status_code == 200
        mock_storage.delete_file.assert_called_once_with(first_key)
        session.refresh(first)
        assert first.original_name == "kbis.jpg"
        assert first.mime_type == "image/jpeg"

    def test_upload_forbidden_for_jobseeker(
        self, client: TestClient, jobseeker_headers, mock_storage
    ):
        response = _upload(client, jobseeker_headers)

        assert response.status_code == 403
        mock_storage.upload_file.assert_not_called()

    def test_upload_requires_authentication(self, client: TestClient, mock_storage):
        response = _upload(client, {})
        assert response.status_code == 401

    def test_upload_storage_outage_is_500(
        self, session: Session, employer_headers, mock_storage
    ):
        from app.database.database import get_session
        from app.main import app

        mock_storage.upload_file.side_effect = RuntimeError("minio down")
        app.dependency_overrides[get_session] = lambda: session
        try:
            response = _upload(
                TestClient(app, raise_server_exceptions=False), employer_headers
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"detail": "An internal error occurred"}
