"""Notification API routes"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..models.notification import Notification
from ..services.notifications import NotificationCenter
from .dependencies import get_notifications

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("", response_model=list[Notification])
async def list_notifications(
    limit: Optional[int] = Query(None, ge=1, le=100),
    notifications: NotificationCenter = Depends(get_notifications),
):
    """Recent notifications, oldest first"""
    return notifications.recent(limit)
