from enum import Enum


class UserRole(str, Enum):
    JOBSEEKER = "jobseeker"
    EMPLOYER = "employer"
    ADMIN = "admin"


class VerificationStatus(str, Enum):
    """Review status stored on a verification record."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class VerificationState(str, Enum):
    """Status shown to an employer; UNVERIFIED stands for "no record yet"."""

    UNVERIFIED = "unverified"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UserVerificationStatus(str, Enum):
    """User-facing verification label denormalized onto the user row."""

    UNDER_REVIEW = "under review"
    PASSED = "passed verification"
    FAILED = "failed verification"


class NotificationSeverity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
