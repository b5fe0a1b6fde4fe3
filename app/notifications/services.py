"""
app/notifications/services.py

Admin Notification Service

Creates back-office notifications from other flows (phone verification,
phone changes, top-ups) and serves the per-role notification inbox.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.enums import NotificationPriority, NotificationType, UserRole
from app.database.models import User
from app.notifications.models import AdminNotification
from app.notifications.schemas import NotificationRead

logger = logging.getLogger(__name__)

SUPPORT_ROLES: tuple[UserRole, ...] = (
    UserRole.SUPER_ADMIN,
    UserRole.SUPERVISOR,
    UserRole.SUPPORT_AGENT,
)


def notify_admins(
    db: AsyncSession,
    type_: NotificationType,
    title: str,
    message: str,
    data: dict[str, Any] | None = None,
    target_roles: tuple[UserRole, ...] = (),
    priority: NotificationPriority = NotificationPriority.NORMAL,
) -> AdminNotification:
    """Queues a notification on the session; the caller's commit persists it."""
    notification = AdminNotification(
        type=type_,
        priority=priority,
        title=title,
        message=message,
        data=data,
        target_roles=[role.value for role in target_roles],
        is_read=False,
    )
    db.add(notification)
    logger.info(f"[NOTIFY] {type_.value} ({priority.value}) -> {notification.target_roles or 'all admins'}")
    return notification


def _visible_to(role: UserRole) -> Any:
    return or_(
        func.cardinality(AdminNotification.target_roles) == 0,
        AdminNotification.target_roles.any(role.value),
    )


class NotificationService:
    """Back-office inbox operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_notifications(
        self, user: User, skip: int = 0, limit: int = 20, unread_only: bool = False
    ) -> tuple[list[NotificationRead], int, int]:
        visible = _visible_to(user.role)
        filters = [visible]
        if unread_only:
            filters.append(AdminNotification.is_read.is_(False))

        rows = (
            (
                await self.db.execute(
                    select(AdminNotification)
                    .where(*filters)
                    .order_by(AdminNotification.created_at.desc())
                    .offset(skip)
                    .limit(limit)
                )
            )
            .scalars()
            .all()
        )
        total = (
            await self.db.execute(select(func.count(AdminNotification.id)).where(*filters))
        ).scalar_one()
        unread = (
            await self.db.execute(
                select(func.count(AdminNotification.id)).where(
                    visible, AdminNotification.is_read.is_(False)
                )
            )
        ).scalar_one()
        return [NotificationRead.model_validate(r) for r in rows], total, unread

    async def mark_read(
        self, user: User, notification_id: UUID | None = None, mark_all: bool = False
    ) -> str:
        now = datetime.now(timezone.utc)
        if mark_all:
            await self.db.execute(
                update(AdminNotification)
                .where(_visible_to(user.role), AdminNotification.is_read.is_(False))
                .values(is_read=True, read_at=now, read_by_id=user.id)
            )
            await self.db.commit()
            logger.info(f"[NOTIFY] {user.id} marked all notifications read")
            return "All notifications marked as read"

        if not notification_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="notification_id or mark_all is required",
            )
        notification = await self.db.get(AdminNotification, notification_id)
        if not notification:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
        notification.is_read = True
        notification.read_at = now
        notification.read_by_id = user.id
        await self.db.commit()
        return "Notification marked as read"

    async def delete_old(self, older_than_days: int = 30) -> int:
        """Removes read notifications created before the cutoff."""
        cutoff = datetime.now(timezone.utc) - timedelta(days=older_than_days)
        result = await self.db.execute(
            delete(AdminNotification).where(
                AdminNotification.is_read.is_(True), AdminNotification.created_at < cutoff
            )
        )
        await self.db.commit()
        deleted = result.rowcount or 0
        logger.info(f"[NOTIFY] Purged {deleted} read notifications older than {older_than_days} days")
        return deleted
