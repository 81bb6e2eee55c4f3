"""Employer verification record and the view models built from it."""

from datetime import datetime, timezone
from typing import Iterator
from dataclasses import dataclass
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel, Field

from app.models.enums import (
    VerificationStatus,
    VerificationState,
    UserVerificationStatus,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EmployerVerification(SQLModel, table=True):
    __tablename__ = "employer_verification"

    id_verification: int | None = Field(default=None, primary_key=True)
    # One record per employer
    id_employer: int = Field(foreign_key="user.id_user", unique=True, index=True)
    status: VerificationStatus = Field(default=VerificationStatus.PENDING, index=True)
    note: str = Field(default="", max_length=1000)

    storage_key: str
    original_name: str = Field(max_length=255)
    mime_type: str = Field(max_length=100)
    size_bytes: int = Field(ge=0)
    document_url: str = Field(default="", max_length=2048)

    id_reviewer: int | None = Field(default=None, foreign_key="user.id_user")
    submitted_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow, index=True)


@dataclass
class DocumentUpload:
    """File received from the employer, before it reaches storage."""

    data: bytes
    filename: str
    content_type: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class VerificationDocumentStream:
    mime_type: str
    filename: str
    stream: Iterator[bytes]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VerificationMe(CamelModel):
    status: VerificationState
    user_verification_status: UserVerificationStatus
    is_verified: bool
    note: str = ""
    submitted_at: datetime | None = None
    updated_at: datetime | None = None
    document_url: str = ""


class VerificationAck(CamelModel):
    message: str


class EmployerSummary(CamelModel):
    id: int
    name: str = ""
    email: str = ""


class EmployerDetail(EmployerSummary):
    is_verified: bool
    verification_status: UserVerificationStatus


class VerificationFile(CamelModel):
    name: str
    mime: str
    size: int


class VerificationSummary(CamelModel):
    id: int
    status: VerificationStatus
    note: str
    submitted_at: datetime
    updated_at: datetime
    employer: EmployerSummary
    file: VerificationFile
    document_url: str = ""


class VerificationDetail(VerificationSummary):
    employer: EmployerDetail
    reviewer_id: int | None = None


class VerificationPage(CamelModel):
    data: list[VerificationSummary]
    page: int
    page_size: int
    total: int


class VerificationDecision(CamelModel):
    # Loose so a missing or unknown value reaches the service and is
    # reported as a 400 rather than a schema error
    status: str | None = None
    note: str | None = ""


class VerificationDecisionResult(CamelModel):
    message: str
    status: VerificationStatus
    note: str
