"""Pydantic schemas for matches."""
from datetime import datetime

from pydantic import BaseModel

from studymatch.models.match import MatchStatus
from studymatch.schemas.study_request import StudyRequestResponse
from studymatch.schemas.user import UserSummary


class MatchResponse(BaseModel):
    id: int
    request_id: int
    user_id_1: int
    user_id_2: int
    status: MatchStatus
    initiated_by: int
    created_at: datetime | None

    class Config:
        from_attributes = True


class MatchDetailResponse(MatchResponse):
    """Match with both participants and the originating request joined in."""
    user1: UserSummary
    user2: UserSummary
    request: StudyRequestResponse
