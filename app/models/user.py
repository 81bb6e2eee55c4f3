from datetime import datetime, timezone
from pydantic import field_validator
from sqlmodel import SQLModel, Field
from .enums import UserRole, UserVerificationStatus


class UserBase(SQLModel):
    name: str = Field(max_length=100)
    email: str = Field(unique=True, index=True, max_length=255)
    role: UserRole = Field(default=UserRole.JOBSEEKER, index=True)


class User(UserBase, table=True):
    id_user: int | None = Field(default=None, primary_key=True)
    hashed_password: str
    # Projection of EmployerVerification.status, written only through
    # app.services.verification.sync_user_projection
    verification_status: UserVerificationStatus = Field(
        default=UserVerificationStatus.UNDER_REVIEW
    )
    is_verified: bool = Field(default=False)
    date_creation: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UserCreate(SQLModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=8)
    role: UserRole = UserRole.JOBSEEKER

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("Invalid email address")
        return value

    @field_validator("role")
    @classmethod
    def reject_admin_role(cls, value: UserRole) -> UserRole:
        # Admin accounts are only seeded, never self-registered
        if value == UserRole.ADMIN:
            raise ValueError("Role must be jobseeker or employer")
        return value


class UserPublic(UserBase):
    id_user: int
    verification_status: UserVerificationStatus
    is_verified: bool
    date_creation: datetime
