"""Pydantic schemas for chat messages."""
from datetime import datetime

from pydantic import BaseModel

from studymatch.schemas.user import UserSummary


class MessageCreate(BaseModel):
    content: str | None = None


class MessageResponse(BaseModel):
    id: int
    match_id: int
    sender_id: int
    content: str
    created_at: datetime | None
    sender: UserSummary | None = None

    class Config:
        from_attributes = True
