"""
notifications/schemas.py
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from app.core.schemas import ORMModel, PaginatedResponse
from app.database.enums import NotificationPriority, NotificationType


class NotificationRead(ORMModel):
    id: UUID
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    data: dict[str, Any] | None = None
    target_roles: list[str] = Field(default_factory=list)
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime


class NotificationListResponse(PaginatedResponse[NotificationRead]):
    unread_count: int = Field(..., description="Unread notifications visible to the caller")


class NotificationMarkReadRequest(BaseModel):
    notification_id: UUID | None = Field(None, description="Single notification to mark read")
    mark_all: bool = Field(False, description="Mark every visible notification read")
