"""Pydantic schemas for notifications."""
from datetime import datetime

from pydantic import BaseModel

from studymatch.models.notification import NotificationType
from studymatch.schemas.study_request import StudyRequestResponse


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    type: NotificationType
    title: str
    message: str
    read: bool
    related_request_id: int | None = None
    created_at: datetime | None

    class Config:
        from_attributes = True


class NotificationWithRequestResponse(NotificationResponse):
    request: StudyRequestResponse | None = None
