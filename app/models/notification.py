"""Notification models for the per-user activity feed."""

from datetime import datetime, timezone
from typing import Any
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON, ForeignKey, Integer

from app.models.enums import NotificationSeverity


class NotificationBase(SQLModel):
    """Base notification fields."""

    severity: NotificationSeverity = Field(default=NotificationSeverity.INFO, index=True)
    message: str = Field(max_length=500)
    is_read: bool = Field(default=False, index=True)


class Notification(NotificationBase, table=True):
    """Database notification model."""

    id_notification: int | None = Field(default=None, primary_key=True)
    id_recipient: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey(
                "user.id_user",
                ondelete="CASCADE",
                name="notification_id_recipient_fkey",
            ),
            nullable=False,
            index=True,
        )
    )
    meta: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )


class NotificationPublic(NotificationBase):
    """Public notification response."""

    id_notification: int
    meta: dict[str, Any]
    created_at: datetime


class NotificationCreate(SQLModel):
    """Schema for creating notifications (internal use)."""

    id_recipient: int
    severity: NotificationSeverity = NotificationSeverity.INFO
    message: str = Field(min_length=1, max_length=500)
    meta: dict[str, Any] = Field(default_factory=dict)
