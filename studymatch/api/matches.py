"""Match routes: list mine, rate partner, chat messages."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studymatch.database import get_db
from studymatch.deps import get_current_user
from studymatch.models.user import User
from studymatch.schemas.match import MatchDetailResponse
from studymatch.schemas.message import MessageCreate, MessageResponse
from studymatch.schemas.rating import RatingCreate, RatingResponse
from studymatch.services import matching, messaging, ratings
from studymatch.services.ws_updates import updates_manager

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("", response_model=list[MatchDetailResponse])
async def list_my_matches(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Matches where the current user is either participant, with partner and request."""
    return await matching.list_matches(db, current_user)


@router.post("/{match_id}/rate", response_model=RatingResponse)
async def rate_partner(
    match_id: int,
    body: RatingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return await ratings.submit_rating(db, current_user, match_id, body.to_user_id, body.rating, body.comment)


@router.get("/{match_id}/messages", response_model=list[MessageResponse])
async def get_messages(
    match_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Messages oldest first. Only the two participants may read them."""
    await matching.get_match_for_participant(db, current_user, match_id)
    return await messaging.list_messages(db, match_id)


@router.post("/{match_id}/messages", response_model=MessageResponse)
async def send_message(
    match_id: int,
    body: MessageCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    message = await messaging.post_message(db, current_user, match_id, body.content)
    await db.commit()
    partner_id = message.match.partner_of(current_user.id)
    await updates_manager.notify_user(partner_id, {"type": "messages", "match_id": match_id})
    return message
