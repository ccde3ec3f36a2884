"""Auth routes: register, login, profile (GET/PATCH /me)."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studymatch.auth.jwt import create_access_token
from studymatch.auth.password import hash_password, verify_password
from studymatch.config import settings
from studymatch.database import get_db
from studymatch.deps import get_current_user
from studymatch.errors import Unauthenticated, ValidationError
from studymatch.models.user import User, default_availability
from studymatch.schemas.user import LoginRequest, Token, UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _clean_courses(courses: list[str]) -> list[str]:
    """Trim, drop blanks and duplicates, keep order."""
    seen: list[str] = []
    for course in courses:
        course = course.strip()
        if course and course not in seen:
            seen.append(course)
    return seen


def _merge_availability(availability: dict[str, list[str]] | None) -> dict[str, list[str]]:
    merged = default_availability()
    for day, slots in (availability or {}).items():
        merged[day.lower()] = list(slots)
    return merged


@router.post("/register", response_model=UserResponse)
async def register(body: UserCreate, db: AsyncSession = Depends(get_db)):
    """Create a new user. Returns user (no password)."""
    email = body.email.lower()
    domain = settings.ALLOWED_EMAIL_DOMAIN
    if domain and not email.endswith("@" + domain.lower()):
        raise ValidationError(f"Must be a valid @{domain} email address")
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise ValidationError("Email already registered")
    full_name = body.full_name.strip()
    if not full_name:
        raise ValidationError("Full name is required")
    user = User(
        email=email,
        hashed_password=hash_password(body.password),
        full_name=full_name,
        major=(body.major or "").strip() or None,
        courses=_clean_courses(body.courses),
        availability=_merge_availability(body.availability),
        total_ratings=0,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


@router.post("/login", response_model=Token)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login with email + password; returns JWT access_token."""
    result = await db.execute(select(User).where(User.email == body.email.lower()))
    user = result.scalar_one_or_none()
    if not user or not verify_password(body.password, user.hashed_password):
        raise Unauthenticated("Invalid email or password")
    return Token(access_token=create_access_token(user.id))


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    """Return the currently authenticated user (requires Bearer token)."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_me(
    body: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update current user profile (name, major, courses, availability)."""
    if body.full_name is not None:
        full_name = body.full_name.strip()
        if not full_name:
            raise ValidationError("Full name cannot be blank")
        current_user.full_name = full_name
    if body.major is not None:
        current_user.major = body.major.strip() or None
    if body.courses is not None:
        current_user.courses = _clean_courses(body.courses)
    if body.availability is not None:
        current_user.availability = _merge_availability(body.availability)
    await db.flush()
    await db.refresh(current_user)
    return current_user
