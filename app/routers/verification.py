"""Employer-facing verification endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlmodel import Session

from app.core.dependencies import get_current_employer
from app.database.database import get_session
from app.models.user import User
from app.models.verification import DocumentUpload, VerificationAck, VerificationMe
from app.services import verification as verification_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/verification", tags=["verification"])


@router.get("/me", response_model=VerificationMe)
def read_my_verification(
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_employer)],
) -> VerificationMe:
    """
    Return the authenticated employer's verification state.

    `status` is `unverified` until a first document is submitted, then one of
    `pending`, `approved`, `rejected`. `userVerificationStatus` and
    `isVerified` mirror the flags stored on the account.

    Raises:
        `401 Unauthorized`: If no valid authentication token is provided.
        `403 Forbidden`: If the user is not an employer.
    """
    employer_id = ensure_id(current_user.id_user, "User")
    return verification_service.get_own_verification(session, employer_id)


async def _upload_document(
    session: Session,
    current_user: User,
    document: UploadFile | None,
    document_url: str,
) -> VerificationAck:
    upload = None
    if document is not None and document.filename:
        upload = DocumentUpload(
            data=await document.read(),
            filename=document.filename,
            content_type=document.content_type or "application/octet-stream",
        )
    employer_id = ensure_id(current_user.id_user, "User")
    return verification_service.submit_or_replace(
        session, employer_id, upload, document_url=document_url
    )


@router.post("/upload", response_model=VerificationAck)
async def upload_verification_document(
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_employer)],
    document: Annotated[
        UploadFile | None, File(description="PDF, JPG or PNG, 8MB max")
    ] = None,
    document_url: Annotated[
        str, Form(alias="documentUrl", description="Optional externally hosted copy")
    ] = "",
) -> VerificationAck:
    """
    Submit or replace the employer's verification document.

    Expects `multipart/form-data` with the file under the `document` field.
    Any earlier submission is replaced and goes back to `pending` review with
    its admin note cleared.

    Raises:
        `400 Bad Request`: If no file is sent, or its type or size is not accepted.
        `401 Unauthorized`: If no valid authentication token is provided.
        `403 Forbidden`: If the user is not an employer.
    """
    return await _upload_document(session, current_user, document, document_url)


@router.post("", response_model=VerificationAck, include_in_schema=False)
async def upload_verification_document_alias(
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_employer)],
    document: Annotated[UploadFile | None, File()] = None,
    document_url: Annotated[str, Form(alias="documentUrl")] = "",
) -> VerificationAck:
    """Older clients post to the collection root."""
    return await _upload_document(session, current_user, document, document_url)
