"""Post-session ratings and the per-user aggregate (rounded mean, count)."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from studymatch.errors import Conflict, Forbidden, NotFound, ValidationError
from studymatch.models.match import Match
from studymatch.models.rating import Rating
from studymatch.models.user import User

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 5


def rounded_mean(scores: list[int]) -> int | None:
    """Mean rounded to the nearest integer, halves up (2.5 -> 3). None for no scores."""
    if not scores:
        return None
    total, count = sum(scores), len(scores)
    return (2 * total + count) // (2 * count)


async def recompute_user_rating(db: AsyncSession, user_id: int) -> User:
    """Re-read every rating addressed to user_id and store average_rating / total_ratings."""
    scores = list((await db.execute(select(Rating.rating).where(Rating.to_user_id == user_id))).scalars().all())
    user = (await db.execute(select(User).where(User.id == user_id))).scalar_one()
    user.average_rating = rounded_mean(scores)
    user.total_ratings = len(scores)
    await db.flush()
    return user


async def submit_rating(
    db: AsyncSession,
    from_user: User,
    match_id: int,
    to_user_id: int | None,
    score: int | None,
    comment: str | None = None,
) -> Rating:
    """
    Rate the other participant of a match. One rating per (match, rater).
    Raises NotFound, Forbidden (not a participant), ValidationError (wrong recipient
    or score outside 1-5) or Conflict (already rated).
    """
    result = await db.execute(select(Match).where(Match.id == match_id))
    match = result.scalar_one_or_none()
    if not match:
        raise NotFound("Match not found")
    if not match.has_participant(from_user.id):
        raise Forbidden()
    if to_user_id is None or to_user_id != match.partner_of(from_user.id):
        raise ValidationError("Invalid recipient")
    if isinstance(score, bool) or not isinstance(score, int) or not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError(f"Rating must be between {MIN_SCORE} and {MAX_SCORE}")

    existing = await db.execute(
        select(Rating.id).where(Rating.match_id == match_id, Rating.from_user_id == from_user.id).limit(1)
    )
    if existing.scalar_one_or_none() is not None:
        raise Conflict("You have already rated this study session")

    rating = Rating(
        match_id=match.id,
        from_user_id=from_user.id,
        to_user_id=to_user_id,
        rating=score,
        comment=comment,
    )
    db.add(rating)
    await db.flush()
    await db.refresh(rating)
    user = await recompute_user_rating(db, to_user_id)
    logger.info(
        "User %s rated user %s on match %s: average %s over %d",
        from_user.id, to_user_id, match.id, user.average_rating, user.total_ratings,
    )
    return rating


async def list_ratings_for_user(db: AsyncSession, user_id: int) -> list[Rating]:
    """Ratings addressed to user_id, newest first, with rater and match loaded."""
    result = await db.execute(
        select(Rating)
        .options(selectinload(Rating.from_user), selectinload(Rating.match))
        .where(Rating.to_user_id == user_id)
        .order_by(Rating.created_at.desc(), Rating.id.desc())
    )
    return list(result.scalars().all())
