"""Pydantic schemas for ratings."""
from datetime import datetime

from pydantic import BaseModel, Field

from studymatch.schemas.match import MatchResponse
from studymatch.schemas.user import UserSummary


class RatingCreate(BaseModel):
    """Request body for POST /matches/{id}/rate. Accepts toUserId or to_user_id."""
    rating: int | None = None
    comment: str | None = None
    to_user_id: int | None = Field(default=None, alias="toUserId")

    class Config:
        populate_by_name = True


class RatingResponse(BaseModel):
    id: int
    match_id: int
    from_user_id: int
    to_user_id: int
    rating: int
    comment: str | None = None
    created_at: datetime | None

    class Config:
        from_attributes = True


class RatingWithRaterResponse(RatingResponse):
    from_user: UserSummary
    match: MatchResponse
