"""Notification routes: list mine, mark read."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studymatch.database import get_db
from studymatch.deps import get_current_user
from studymatch.models.user import User
from studymatch.schemas.notification import NotificationResponse, NotificationWithRequestResponse
from studymatch.services import notifications

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationWithRequestResponse])
async def list_notifications(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return await notifications.list_notifications(db, current_user)


@router.post("/{notification_id}/read", response_model=NotificationResponse | None)
async def mark_read(
    notification_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Mark one of my notifications read. Returns null if it is not mine or does not exist."""
    return await notifications.mark_read(db, current_user, notification_id)
