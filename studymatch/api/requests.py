"""Study request routes: create, list open, accept."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studymatch.database import get_db
from studymatch.deps import get_current_user
from studymatch.models.user import User
from studymatch.schemas.match import MatchResponse
from studymatch.schemas.study_request import StudyRequestCreate, StudyRequestResponse
from studymatch.services import matching
from studymatch.services.ws_updates import updates_manager

router = APIRouter(prefix="/requests", tags=["requests"])


@router.post("", response_model=StudyRequestResponse)
async def create_request(
    body: StudyRequestCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Post a request; every other user taking the course gets a notification."""
    request, notified = await matching.create_request(db, current_user, body.course, body.description)
    # Hints mean "refetch now", so the writes must be visible first.
    await db.commit()
    await updates_manager.notify_users(notified, {"type": "notifications"})
    return request


@router.get("", response_model=list[StudyRequestResponse])
async def list_requests(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Pending requests from other users, newest first."""
    return await matching.list_open_requests(db, current_user)


@router.post("/{request_id}/accept", response_model=MatchResponse)
async def accept_request(
    request_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a confirmed match against a pending request (404 / 400 / 403 on failure)."""
    match = await matching.accept_request(db, current_user, request_id)
    await db.commit()
    participants = [match.user_id_1, match.user_id_2]
    await updates_manager.notify_users(participants, {"type": "matches"})
    await updates_manager.notify_users(participants, {"type": "notifications"})
    return match
