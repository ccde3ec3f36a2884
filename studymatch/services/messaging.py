"""Per-match chat log. Messages are append-only and allowed only in confirmed matches."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from studymatch.errors import Forbidden, NotFound, ValidationError
from studymatch.models.match import Match, MatchStatus
from studymatch.models.message import Message
from studymatch.models.user import User


async def post_message(db: AsyncSession, user: User, match_id: int, content: str | None) -> Message:
    result = await db.execute(
        select(Match).where(Match.id == match_id, Match.status == MatchStatus.CONFIRMED)
    )
    match = result.scalar_one_or_none()
    if not match:
        raise NotFound("Match not found or not confirmed")
    if not match.has_participant(user.id):
        raise Forbidden()
    if not content or not content.strip():
        raise ValidationError("Message content is required")
    # match and sender are loaded in this session; attach them directly
    message = Message(match=match, sender=user, content=content)
    db.add(message)
    await db.flush()
    await db.refresh(message, attribute_names=["created_at"])
    return message


async def list_messages(db: AsyncSession, match_id: int) -> list[Message]:
    """All messages of the match, oldest first, with senders loaded."""
    result = await db.execute(
        select(Message)
        .options(selectinload(Message.sender))
        .where(Message.match_id == match_id)
        .order_by(Message.created_at.asc(), Message.id.asc())
    )
    return list(result.scalars().all())
