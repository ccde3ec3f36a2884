"""Study request lifecycle: create, accept (pending -> matched + confirmed match), list."""
import logging

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from studymatch.errors import Conflict, Forbidden, NotFound, ValidationError
from studymatch.models.match import Match, MatchStatus
from studymatch.models.study_request import RequestStatus, StudyRequest
from studymatch.models.user import User
from studymatch.services.notifications import notify_course_peers, notify_match_confirmed

logger = logging.getLogger(__name__)


async def create_request(
    db: AsyncSession,
    user: User,
    course: str | None,
    description: str | None,
) -> tuple[StudyRequest, list[int]]:
    """
    Insert a pending request owned by user and notify every other user taking the
    course. Returns the request and the notified user ids.
    """
    course = (course or "").strip()
    description = (description or "").strip()
    if not course:
        raise ValidationError("Course is required")
    if not description:
        raise ValidationError("Description is required")
    request = StudyRequest(
        user_id=user.id,
        course=course,
        description=description,
        status=RequestStatus.PENDING,
    )
    db.add(request)
    await db.flush()
    await db.refresh(request)
    notified = await notify_course_peers(db, request)
    logger.info("User %s created request %s for %s", user.id, request.id, course)
    return request, notified


async def accept_request(db: AsyncSession, accepting_user: User, request_id: int) -> Match:
    """
    Accept a pending request: mark it matched, create a confirmed match and notify
    both users. All writes share the caller's transaction.
    Raises NotFound, Conflict (not pending, or lost a concurrent accept) or Forbidden (own request).
    """
    result = await db.execute(select(StudyRequest).where(StudyRequest.id == request_id))
    request = result.scalar_one_or_none()
    if not request:
        raise NotFound("Request not found")
    if request.status != RequestStatus.PENDING:
        raise Conflict("This request is no longer available")
    if request.user_id == accepting_user.id:
        raise Forbidden("Cannot accept your own request")

    # Only one accept can flip the row; the store serializes concurrent attempts.
    flipped = await db.execute(
        update(StudyRequest)
        .where(StudyRequest.id == request_id, StudyRequest.status == RequestStatus.PENDING)
        .values(status=RequestStatus.MATCHED)
    )
    if flipped.rowcount != 1:
        raise Conflict("This request is no longer available")

    match = Match(
        request_id=request.id,
        user_id_1=request.user_id,
        user_id_2=accepting_user.id,
        status=MatchStatus.CONFIRMED,
        initiated_by=accepting_user.id,
    )
    db.add(match)
    await db.flush()
    await db.refresh(match)
    await notify_match_confirmed(db, match)
    logger.info("Request %s matched: match %s (users %s, %s)", request.id, match.id, match.user_id_1, match.user_id_2)
    return match


async def list_open_requests(db: AsyncSession, user: User) -> list[StudyRequest]:
    """Pending requests from other users, newest first."""
    result = await db.execute(
        select(StudyRequest)
        .where(StudyRequest.status == RequestStatus.PENDING)
        .where(StudyRequest.user_id != user.id)
        .order_by(StudyRequest.created_at.desc(), StudyRequest.id.desc())
    )
    return list(result.scalars().all())


async def list_matches(db: AsyncSession, user: User) -> list[Match]:
    """Matches where user is either participant, newest first, with users and request loaded."""
    result = await db.execute(
        select(Match)
        .options(selectinload(Match.user1), selectinload(Match.user2), selectinload(Match.request))
        .where(or_(Match.user_id_1 == user.id, Match.user_id_2 == user.id))
        .order_by(Match.created_at.desc(), Match.id.desc())
    )
    return list(result.scalars().all())


async def get_match_for_participant(db: AsyncSession, user: User, match_id: int) -> Match:
    result = await db.execute(select(Match).where(Match.id == match_id))
    match = result.scalar_one_or_none()
    if not match:
        raise NotFound("Match not found")
    if not match.has_participant(user.id):
        raise Forbidden()
    return match
