"""Pydantic schemas for study requests."""
from datetime import datetime

from pydantic import BaseModel

from studymatch.models.study_request import RequestStatus


class StudyRequestCreate(BaseModel):
    """Request body for POST /requests. Blank fields are rejected by the service."""
    course: str | None = None
    description: str | None = None


class StudyRequestResponse(BaseModel):
    id: int
    user_id: int
    course: str
    description: str
    status: RequestStatus
    created_at: datetime | None

    class Config:
        from_attributes = True
