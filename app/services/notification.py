"""Notification service: best-effort delivery plus the recipient's feed."""

import logging
from typing import Any

from sqlmodel import Session, select, func

from app.exceptions import NotFoundError
from app.models.enums import NotificationSeverity
from app.models.notification import Notification, NotificationCreate

logger = logging.getLogger(__name__)


def create_notification(
    session: Session, notification_in: NotificationCreate
) -> Notification:
    """
    Create and commit a notification.

    Args:
        session: Database session
        notification_in: Notification creation data

    Returns:
        Notification: Created notification
    """
    notification = Notification.model_validate(notification_in)
    session.add(notification)
    session.commit()
    session.refresh(notification)
    return notification


def notify(
    session: Session,
    recipient_id: int,
    severity: NotificationSeverity,
    message: str,
    meta: dict[str, Any] | None = None,
) -> Notification | None:
    """
    Deliver a notification without letting a failure reach the caller.

    Callers must have committed their own work before calling this: on any
    error the session is rolled back, which only discards the notification.
    Nothing is retried.

    Returns:
        Notification | None: The stored notification, or None if delivery failed.
    """
    try:
        notification_in = NotificationCreate(
            id_recipient=recipient_id,
            severity=severity,
            message=message,
            meta=meta or {},
        )
        return create_notification(session, notification_in)
    except Exception as e:
        session.rollback()
        logger.warning(
            f"Dropped {severity.value} notification for user {recipient_id}: {e!r}"
        )
        return None


def get_user_notifications(
    session: Session,
    user_id: int,
    *,
    unread_only: bool = False,
    offset: int = 0,
    limit: int = 50,
) -> list[Notification]:
    """
    Get notifications for a user, newest first.

    Args:
        session: Database session
        user_id: Recipient's user ID
        unread_only: If True, only return unread notifications
        offset: Pagination offset
        limit: Maximum notifications to return
    """
    statement = select(Notification).where(Notification.id_recipient == user_id)

    if unread_only:
        statement = statement.where(Notification.is_read == False)  # noqa: E712

    statement = (
        statement.order_by(
            Notification.created_at.desc(),  # type: ignore
            Notification.id_notification.desc(),  # type: ignore
        )
        .offset(offset)
        .limit(limit)
    )

    return list(session.exec(statement).all())


def get_unread_count(session: Session, user_id: int) -> int:
    """Count a user's unread notifications (UI badge)."""
    return session.exec(
        select(func.count())
        .select_from(Notification)
        .where(
            Notification.id_recipient == user_id,
            Notification.is_read == False,  # noqa: E712
        )
    ).one()


def _get_owned_notification(
    session: Session, notification_id: int, user_id: int
) -> Notification:
    notification = session.get(Notification, notification_id)
    # Someone else's notification is reported exactly like a missing one
    if not notification or notification.id_recipient != user_id:
        raise NotFoundError("Notification", notification_id)
    return notification


def mark_notification_as_read(
    session: Session, notification_id: int, user_id: int
) -> Notification:
    """
    Mark one of the user's notifications as read.

    Raises:
        NotFoundError: If the notification does not exist or belongs to another user.
    """
    notification = _get_owned_notification(session, notification_id, user_id)
    if not notification.is_read:
        notification.is_read = True
        session.add(notification)
        session.commit()
        session.refresh(notification)
    return notification


def mark_all_as_read(session: Session, user_id: int) -> int:
    """
    Mark every unread notification of a user as read.

    Returns:
        int: Number of notifications that changed.
    """
    statement = select(Notification).where(
        Notification.id_recipient == user_id,
        Notification.is_read == False,  # noqa: E712
    )
    notifications = session.exec(statement).all()

    for notification in notifications:
        notification.is_read = True
        session.add(notification)

    session.commit()
    return len(notifications)


def delete_notification(session: Session, notification_id: int, user_id: int) -> None:
    """
    Delete one of the user's notifications.

    Raises:
        NotFoundError: If the notification does not exist or belongs to another user.
    """
    notification = _get_owned_notification(session, notification_id, user_id)
    session.delete(notification)
    session.commit()
