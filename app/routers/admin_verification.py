"""Admin review endpoints for employer verifications."""

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlmodel import Session

from app.core.dependencies import get_current_admin
from app.database.database import get_session
from app.models.user import User
from app.models.verification import (
    VerificationDecision,
    VerificationDecisionResult,
    VerificationDetail,
    VerificationPage,
)
from app.services import verification as verification_service

router = APIRouter(
    prefix="/admin/verification",
    tags=["admin verification"],
    dependencies=[Depends(get_current_admin)],
)


@router.get("/list", response_model=VerificationPage)
def list_verifications(
    session: Annotated[Session, Depends(get_session)],
    status: Annotated[
        str | None,
        Query(description="pending, approved or rejected; other values are ignored"),
    ] = None,
    search: Annotated[str | None, Query(description="Employer name or email")] = None,
    page: int = 1,
    page_size: Annotated[int, Query(alias="pageSize")] = 20,
) -> VerificationPage:
    """
    List verification submissions for review.

    ### Query Parameters:
    - **status**: Only this review status; unknown values are ignored
    - **search**: Case-insensitive match on employer name or email
    - **page**: 1-indexed page number
    - **pageSize**: Items per page (capped at 100)
    """
    return verification_service.admin_list_verifications(
        session, status=status, search=search, page=page, page_size=page_size
    )


@router.get("/{verification_id}", response_model=VerificationDetail)
def read_verification(
    verification_id: int,
    session: Annotated[Session, Depends(get_session)],
) -> VerificationDetail:
    """
    Get one submission with the employer's identity and current account flags.

    Raises:
        `404 NotFoundError`: If the submission does not exist.
    """
    return verification_service.admin_get_one(session, verification_id)


@router.get("/{verification_id}/file")
def stream_verification_file(
    verification_id: int,
    session: Annotated[Session, Depends(get_session)],
) -> StreamingResponse:
    """
    Stream the submitted document inline with its stored content type.

    Raises:
        `404 NotFoundError`: If the submission or its stored file is missing.
    """
    document = verification_service.admin_open_document(session, verification_id)
    return StreamingResponse(
        document.stream,
        media_type=document.mime_type,
        headers={
            "Content-Disposition": f'inline; filename="{quote(document.filename)}"'
        },
    )


@router.patch("/{verification_id}/status", response_model=VerificationDecisionResult)
def decide_verification(
    verification_id: int,
    decision: VerificationDecision,
    session: Annotated[Session, Depends(get_session)],
    current_admin: Annotated[User, Depends(get_current_admin)],
) -> VerificationDecisionResult:
    """
    Approve, reject or send back to pending, with an optional note.

    The employer's account flags are updated in the same transaction and the
    employer is notified.

    Raises:
        `400 Bad Request`: If `status` is missing or not exactly pending,
            approved or rejected (lowercase).
        `404 NotFoundError`: If the submission does not exist.
    """
    return verification_service.admin_decide(
        session,
        verification_id,
        decision.status,
        decision.note,
        reviewer_id=current_admin.id_user,
    )
