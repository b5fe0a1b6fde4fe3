"""
app/notifications/routes.py

Admin Notification Inbox

- GET    /admin/notifications: notifications visible to the caller's role
- PUT    /admin/notifications: mark one or all as read
- DELETE /admin/notifications: purge old read notifications (super admin)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import require_roles
from app.core.limiter import limiter
from app.core.permissions import ADMIN_ROLES
from app.core.schemas import MessageResponse
from app.database.enums import UserRole
from app.database.models import User
from app.database.session import get_db
from app.notifications.schemas import NotificationListResponse, NotificationMarkReadRequest
from app.notifications.services import NotificationService

router = APIRouter(prefix="/admin/notifications", tags=["Admin Notifications"])
logger = logging.getLogger(__name__)

DBDep = Annotated[AsyncSession, Depends(get_db)]
AdminDep = Annotated[User, Depends(require_roles(*ADMIN_ROLES))]
SuperAdminDep = Annotated[User, Depends(require_roles(UserRole.SUPER_ADMIN))]


@router.get(
    "",
    response_model=NotificationListResponse,
    status_code=status.HTTP_200_OK,
    summary="List Notifications",
)
@limiter.limit("60/minute")
async def list_notifications(
    request: Request,
    db: DBDep,
    current_user: AdminDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    unread_only: bool = Query(False),
) -> NotificationListResponse:
    """Return the caller's notification inbox."""
    items, total, unread = await NotificationService(db).list_notifications(
        current_user, skip=skip, limit=limit, unread_only=unread_only
    )
    return NotificationListResponse(
        total_count=total,
        has_next_page=(skip + limit) < total,
        items=items,
        unread_count=unread,
    )


@router.put(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Mark Notifications Read",
)
@limiter.limit("30/minute")
async def mark_notifications_read(
    request: Request,
    payload: NotificationMarkReadRequest,
    db: DBDep,
    current_user: AdminDep,
) -> MessageResponse:
    """Mark a notification, or all visible notifications, as read."""
    detail = await NotificationService(db).mark_read(
        current_user, notification_id=payload.notification_id, mark_all=payload.mark_all
    )
    return MessageResponse(detail=detail)


@router.delete(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Purge Old Notifications",
)
@limiter.limit("5/minute")
async def purge_notifications(
    request: Request,
    db: DBDep,
    current_user: SuperAdminDep,
    older_than_days: int = Query(30, ge=1, le=365),
) -> MessageResponse:
    """Delete read notifications older than the given number of days."""
    deleted = await NotificationService(db).delete_old(older_than_days)
    logger.info(f"[NOTIFY] Super admin {current_user.id} purged {deleted} notifications")
    return MessageResponse(detail=f"Deleted {deleted} old notification(s)")
