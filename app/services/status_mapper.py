"""Translation from a verification record's review status to the user projection."""

from typing import NamedTuple

from app.models.enums import VerificationStatus, UserVerificationStatus


class StatusProjection(NamedTuple):
    verification_status: UserVerificationStatus
    is_verified: bool


_PROJECTIONS: dict[VerificationStatus | None, StatusProjection] = {
    None: StatusProjection(UserVerificationStatus.UNDER_REVIEW, False),
    VerificationStatus.PENDING: StatusProjection(
        UserVerificationStatus.UNDER_REVIEW, False
    ),
    VerificationStatus.APPROVED: StatusProjection(UserVerificationStatus.PASSED, True),
    VerificationStatus.REJECTED: StatusProjection(UserVerificationStatus.FAILED, False),
}


def map_status(status: VerificationStatus | None) -> StatusProjection:
    """
    Return the user-facing label and flag for a review status.

    `None` stands for "employer has no verification record" and maps like
    pending: under review, not verified.

    Parameters:
        status: Review status of the record, or None when there is no record.

    Returns:
        StatusProjection: `(verification_status, is_verified)` to store on the user.
    """
    if status is not None:
        status = VerificationStatus(status)
    return _PROJECTIONS[status]
