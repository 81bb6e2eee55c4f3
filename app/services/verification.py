"""Employer verification workflow: submission, admin review and status propagation.

Every write to a verification record's status goes together with a
recomputation of the employer's `verification_status`/`is_verified`
(see `sync_user_projection`) and both are committed in the same
transaction. Notifications and the release of replaced artifacts happen
after that commit and never affect the outcome of the operation.
"""

import logging
from datetime import datetime, timezone
from io import BytesIO

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func

from app.core.config import get_settings
from app.exceptions import NotFoundError, ValidationError, StorageObjectNotFoundError
from app.models.enums import (
    NotificationSeverity,
    VerificationState,
    VerificationStatus,
)
from app.models.user import User
from app.models.verification import (
    DocumentUpload,
    EmployerDetail,
    EmployerSummary,
    EmployerVerification,
    VerificationAck,
    VerificationDecisionResult,
    VerificationDetail,
    VerificationDocumentStream,
    VerificationFile,
    VerificationMe,
    VerificationPage,
    VerificationSummary,
)
from app.services import notification as notification_service
from app.services.status_mapper import map_status
from app.services.storage import storage_service
from app.utils.validation import validate_verification_document

logger = logging.getLogger(__name__)

UPLOAD_ACK_MESSAGE = "Uploaded. Pending review."
UPLOAD_NOTIFICATION_MESSAGE = (
    "Your verification document was submitted and is pending review."
)
NOTIFICATION_MAX_LENGTH = 500
NOTE_MAX_LENGTH = 1000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_status(value: str | VerificationStatus | None) -> VerificationStatus | None:
    """
    Interpret a review status coming from a request.

    Returns:
        VerificationStatus | None: The matching status, or None when the value
        is empty or not exactly one of pending/approved/rejected.
    """
    if value is None:
        return None
    if isinstance(value, VerificationStatus):
        return value
    try:
        return VerificationStatus(value)
    except ValueError:
        return None


def sync_user_projection(user: User, status: VerificationStatus | None) -> None:
    """
    Copy the Status Mapper's projection of `status` onto the user.

    This is the only writer of `User.verification_status` and
    `User.is_verified`. The caller adds both objects to the session and
    commits them together.
    """
    projection = map_status(status)
    user.verification_status = projection.verification_status
    user.is_verified = projection.is_verified


def get_verification(session: Session, record_id: int) -> EmployerVerification | None:
    return session.get(EmployerVerification, record_id)


def get_verification_by_employer(
    session: Session, employer_id: int
) -> EmployerVerification | None:
    statement = select(EmployerVerification).where(
        EmployerVerification.id_employer == employer_id
    )
    return session.exec(statement).first()


def _get_user_or_404(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


def _get_verification_or_404(session: Session, record_id: int) -> EmployerVerification:
    record = get_verification(session, record_id)
    if not record:
        raise NotFoundError("Verification", record_id)
    return record


def _document_reference(record: EmployerVerification) -> str:
    """External URL captured at upload, else a short-lived link to the stored file."""
    if record.document_url:
        return record.document_url
    url = storage_service.get_presigned_url(
        record.storage_key,
        expires_in_hours=get_settings().VERIFICATION_URL_EXPIRY_HOURS,
    )
    return url or ""


def _release_artifact(storage_key: str) -> None:
    # Best-effort: an orphaned object is acceptable, a failed request is not
    try:
        if not storage_service.delete_file(storage_key):
            logger.warning(f"Verification artifact '{storage_key}' was not released.")
    except Exception as e:
        logger.error(f"Failed to release verification artifact '{storage_key}': {e!r}")


def get_own_verification(session: Session, employer_id: int) -> VerificationMe:
    """
    Build the employer's view of their verification.

    With no record the status is the explicit `unverified` state; the
    projection fields always come from the user row.

    Raises:
        NotFoundError: If the employer does not exist.
    """
    employer = _get_user_or_404(session, employer_id)
    record = get_verification_by_employer(session, employer_id)

    if record is None:
        return VerificationMe(
            status=VerificationState.UNVERIFIED,
            user_verification_status=employer.verification_status,
            is_verified=employer.is_verified,
        )

    return VerificationMe(
        status=VerificationState(VerificationStatus(record.status).value),
        user_verification_status=employer.verification_status,
        is_verified=employer.is_verified,
        note=record.note or "",
        submitted_at=record.submitted_at,
        updated_at=record.updated_at,
        document_url=_document_reference(record),
    )


def _write_submission(
    session: Session,
    employer: User,
    upload: DocumentUpload,
    storage_key: str,
    document_url: str,
) -> str | None:
    """
    Create or overwrite the employer's record and sync the user in one commit.

    Returns:
        str | None: Storage key of the document being replaced, if any.
    """
    assert employer.id_user is not None
    now = _utcnow()
    previous_key = None

    record = get_verification_by_employer(session, employer.id_user)
    if record is None:
        record = EmployerVerification(
            id_employer=employer.id_user,
            storage_key=storage_key,
            original_name=upload.filename,
            mime_type=upload.content_type,
            size_bytes=upload.size,
        )
    else:
        previous_key = record.storage_key

    record.status = VerificationStatus.PENDING
    record.note = ""
    record.id_reviewer = None
    record.storage_key = storage_key
    record.original_name = upload.filename[:255]
    record.mime_type = upload.content_type
    record.size_bytes = upload.size
    record.document_url = document_url
    record.submitted_at = now
    record.updated_at = now

    sync_user_projection(employer, record.status)
    session.add(record)
    session.add(employer)
    session.commit()
    return previous_key


def submit_or_replace(
    session: Session,
    employer_id: int,
    upload: DocumentUpload | None,
    document_url: str = "",
) -> VerificationAck:
    """
    Submit a verification document, replacing any earlier submission.

    The new artifact is stored first, then the record (status reset to
    pending, note and reviewer cleared, submission time refreshed) and the
    employer's projection are committed together. Only after that commit is
    the replaced artifact released. Release and the confirmation notification
    are best-effort.

    Parameters:
        employer_id: The submitting employer.
        upload: The received file; None when the request carried no file.
        document_url: Optional externally hosted copy of the document.

    Returns:
        VerificationAck: Confirmation message.

    Raises:
        ValidationError: If no file was sent, or its type or size is not accepted.
        NotFoundError: If the employer does not exist.
    """
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded.", field="document")
    validate_verification_document(
        upload.filename,
        upload.content_type,
        upload.size,
        get_settings().VERIFICATION_MAX_UPLOAD_BYTES,
    )
    employer = _get_user_or_404(session, employer_id)
    document_url = (document_url or "").strip()

    storage_key = storage_service.upload_file(
        file_data=BytesIO(upload.data),
        file_name=upload.filename,
        content_type=upload.content_type,
        size=upload.size,
        owner_id=employer_id,
    )

    try:
        try:
            previous_key = _write_submission(
                session, employer, upload, storage_key, document_url
            )
        except IntegrityError:
            # A concurrent first submission inserted the record; replace it
            session.rollback()
            previous_key = _write_submission(
                session, employer, upload, storage_key, document_url
            )
    except Exception:
        session.rollback()
        _release_artifact(storage_key)
        raise

    if previous_key and previous_key != storage_key:
        _release_artifact(previous_key)

    logger.info(f"Employer {employer_id} submitted a verification document.")
    notification_service.notify(
        session,
        employer_id,
        NotificationSeverity.INFO,
        UPLOAD_NOTIFICATION_MESSAGE,
        {"action": "verification_upload"},
    )
    return VerificationAck(message=UPLOAD_ACK_MESSAGE)


def _to_summary(record: EmployerVerification) -> dict:
    assert record.id_verification is not None
    return {
        "id": record.id_verification,
        "status": record.status,
        "note": record.note or "",
        "submitted_at": record.submitted_at,
        "updated_at": record.updated_at,
        "file": VerificationFile(
            name=record.original_name, mime=record.mime_type, size=record.size_bytes
        ),
        "document_url": record.document_url or "",
    }


def _escape_like(term: str) -> str:
    """Make `%`, `_` and the escape character match literally in LIKE."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def admin_list_verifications(
    session: Session,
    *,
    status: str | None = None,
    search: str | None = None,
    page: int = 1,
    page_size: int = 20,
) -> VerificationPage:
    """
    List verification records joined with their employer, newest activity first.

    Parameters:
        status: Restrict to one review status; any other value means no filter.
        search: Case-insensitive substring matched against employer name or email.
        page: 1-indexed page number; values below 1 are treated as 1.
        page_size: Items per page, clamped to [1, VERIFICATION_PAGE_SIZE_MAX].

    Returns:
        VerificationPage: The page of summaries and the total matching the filter.
    """
    page = max(1, page)
    page_size = min(max(1, page_size), get_settings().VERIFICATION_PAGE_SIZE_MAX)

    filters = []
    status_filter = parse_status(status)
    if status_filter is not None:
        filters.append(EmployerVerification.status == status_filter)
    if search and search.strip():
        search_term = f"%{_escape_like(search.strip())}%"
        filters.append(
            or_(
                User.name.ilike(search_term, escape="\\"),  # type: ignore
                User.email.ilike(search_term, escape="\\"),  # type: ignore
            )
        )

    join_clause = User.id_user == EmployerVerification.id_employer
    statement = select(EmployerVerification, User).join(User, join_clause)  # type: ignore
    count_statement = (
        select(func.count())
        .select_from(EmployerVerification)
        .join(User, join_clause)  # type: ignore
    )
    for condition in filters:
        statement = statement.where(condition)
        count_statement = count_statement.where(condition)

    total = session.exec(count_statement).one()

    statement = (
        statement.order_by(
            EmployerVerification.updated_at.desc(),  # type: ignore
            EmployerVerification.id_verification.desc(),  # type: ignore
        )
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    rows = session.exec(statement).all()

    data = [
        VerificationSummary(
            **_to_summary(record),
            employer=EmployerSummary(
                id=employer.id_user, name=employer.name, email=employer.email
            ),
        )
        for record, employer in rows
    ]
    return VerificationPage(data=data, page=page, page_size=page_size, total=total)


def admin_get_one(session: Session, record_id: int) -> VerificationDetail:
    """
    Load one verification with its employer's identity and current projection.

    Raises:
        NotFoundError: If the record does not exist.
    """
    record = _get_verification_or_404(session, record_id)
    employer = _get_user_or_404(session, record.id_employer)
    assert employer.id_user is not None

    return VerificationDetail(
        **_to_summary(record),
        employer=EmployerDetail(
            id=employer.id_user,
            name=employer.name,
            email=employer.email,
            is_verified=employer.is_verified,
            verification_status=employer.verification_status,
        ),
        reviewer_id=record.id_reviewer,
    )


def admin_open_document(session: Session, record_id: int) -> VerificationDocumentStream:
    """
    Open the stored document of a verification for streaming.

    Raises:
        NotFoundError: If the record does not exist, or its artifact is gone from storage.
    """
    record = _get_verification_or_404(session, record_id)
    try:
        stream = storage_service.open_stream(record.storage_key)
    except StorageObjectNotFoundError:
        logger.warning(
            f"Verification {record_id} references missing artifact '{record.storage_key}'."
        )
        raise NotFoundError("Verification document", record_id)

    return VerificationDocumentStream(
        mime_type=record.mime_type, filename=record.original_name, stream=stream
    )


def _decision_notification(
    status: VerificationStatus, note: str
) -> tuple[NotificationSeverity, str]:
    if status == VerificationStatus.APPROVED:
        return (
            NotificationSeverity.SUCCESS,
            "Your employer verification has been approved.",
        )
    if status == VerificationStatus.REJECTED:
        message = (
            f"Your employer verification was rejected: {note}"
            if note
            else "Your employer verification was rejected."
        )
        return NotificationSeverity.WARNING, message[:NOTIFICATION_MAX_LENGTH]
    return NotificationSeverity.INFO, "Your employer verification is pending review."


def admin_decide(
    session: Session,
    record_id: int,
    status: str | VerificationStatus | None,
    note: str | None = "",
    reviewer_id: int | None = None,
) -> VerificationDecisionResult:
    """
    Record an admin decision on a verification and propagate it to the employer.

    The record's status, note, reviewer and update time are committed
    together with the employer's projection, then the employer is notified
    (success on approval, warning on rejection, info back to pending).
    Applying the same decision twice leaves the same state.

    Raises:
        ValidationError: If `status` is missing or not exactly pending, approved
            or rejected, or the note is longer than 1000 characters.
        NotFoundError: If the record does not exist.
    """
    decision = parse_status(status)
    if decision is None:
        raise ValidationError("Invalid status", field="status")

    record = _get_verification_or_404(session, record_id)
    employer = _get_user_or_404(session, record.id_employer)
    employer_id = record.id_employer
    note = (note or "").strip()
    if len(note) > NOTE_MAX_LENGTH:
        raise ValidationError(
            f"Note must be at most {NOTE_MAX_LENGTH} characters", field="note"
        )

    record.status = decision
    record.note = note
    record.id_reviewer = reviewer_id
    record.updated_at = _utcnow()
    sync_user_projection(employer, decision)

    session.add(record)
    session.add(employer)
    try:
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(
        f"Verification {record_id} set to {decision.value} by reviewer {reviewer_id}."
    )
    severity, message = _decision_notification(decision, note)
    notification_service.notify(
        session,
        employer_id,
        severity,
        message,
        {"verificationId": str(record_id), "decision": decision.value, "note": note},
    )
    return VerificationDecisionResult(message="Updated", status=decision, note=note)
