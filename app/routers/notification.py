"""Notification router for the authenticated user's activity feed."""

from typing import Annotated
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.database.database import get_session
from app.core.dependencies import get_current_user
from app.models.user import User
from app.models.notification import NotificationPublic
from app.services import notification as notification_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationPublic])
def get_notifications(
    *,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
    unread_only: bool = Query(
        False, description="If true, only return unread notifications"
    ),
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
) -> list[NotificationPublic]:
    """
    Get notifications for the authenticated user.

    Returns verification events (submission received, approved, rejected, ...)
    ordered by date (newest first).

    ### Query Parameters:
    - **unread_only**: Filter to only unread notifications
    - **offset**: Pagination offset
    - **limit**: Max results (1-100, default 50)

    ### Authorization:
    - Must be authenticated (any role)

    Returns:
        list[NotificationPublic]: List of notifications ordered by date (newest first).

    Raises:
        401 Unauthorized: If no valid authentication token is provided.
    """
    user_id = ensure_id(current_user.id_user, "User")
    notifications = notification_service.get_user_notifications(
        session,
        user_id,
        unread_only=unread_only,
        offset=offset,
        limit=limit,
    )

    return [NotificationPublic.model_validate(n) for n in notifications]


@router.get("/unread-count", response_model=dict)
def get_unread_count(
    *,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """
    Get count of unread notifications.

    Useful for displaying notification badge in UI.

    Returns:
        dict: Dictionary containing count.
    """
    user_id = ensure_id(current_user.id_user, "User")
    return {"count": notification_service.get_unread_count(session, user_id)}


@router.patch("/read-all", response_model=dict)
def mark_all_notifications_as_read(
    *,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """
    Mark every unread notification of the user as read.

    Returns:
        dict: Confirmation message and number of notifications modified.
    """
    user_id = ensure_id(current_user.id_user, "User")
    modified = notification_service.mark_all_as_read(session, user_id)
    return {"message": "All notifications marked as read", "modified": modified}


@router.patch("/{notification_id}/read", response_model=dict)
def mark_notification_as_read(
    notification_id: int,
    *,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """
    Mark one notification as read.

    ### Authorization:
    - Can only mark own notifications as read

    Raises:
        401 Unauthorized: If no valid authentication token is provided.
        404 NotFoundError: If the notification doesn't exist or belongs to someone else.
    """
    user_id = ensure_id(current_user.id_user, "User")
    notification_service.mark_notification_as_read(session, notification_id, user_id)
    return {"message": "Notification marked as read"}


@router.delete("/{notification_id}", response_model=dict)
def delete_notification(
    notification_id: int,
    *,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """
    Delete one of the user's notifications.

    Raises:
        404 NotFoundError: If the notification doesn't exist or belongs to someone else.
    """
    user_id = ensure_id(current_user.id_user, "User")
    notification_service.delete_notification(session, notification_id, user_id)
    return {"message": "Notification deleted"}
