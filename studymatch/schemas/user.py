"""Pydantic schemas for auth and profiles: register, login, user response, token."""
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    """Request body for POST /auth/register."""
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1, max_length=255)
    major: str | None = Field(default=None, max_length=255)
    courses: list[str] = Field(default_factory=list)
    availability: dict[str, list[str]] | None = None


class UserSummary(BaseModel):
    """Public identity shown next to matches, messages and ratings."""
    id: int
    full_name: str
    major: str | None = None
    average_rating: int | None = None
    total_ratings: int = 0

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """User in API responses (no password)."""
    id: int
    email: str
    full_name: str
    major: str | None = None
    courses: list[str] = []
    availability: dict[str, list[str]] = {}
    average_rating: int | None = None
    total_ratings: int = 0
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    """Request body for PATCH /auth/me (profile update)."""
    full_name: str | None = Field(default=None, max_length=255)
    major: str | None = Field(default=None, max_length=255)
    courses: list[str] | None = None
    availability: dict[str, list[str]] | None = None


class Token(BaseModel):
    """Response for login: access_token and type."""
    access_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    """Request body for POST /auth/login."""
    email: EmailStr
    password: str
