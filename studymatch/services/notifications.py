"""Notification dispatcher: rows written as side effects of request/match transitions."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from studymatch.models.match import Match
from studymatch.models.notification import Notification, NotificationType
from studymatch.models.study_request import StudyRequest
from studymatch.models.user import User

logger = logging.getLogger(__name__)


async def notify_course_peers(db: AsyncSession, request: StudyRequest) -> list[int]:
    """
    Insert one study_request notification for every other user whose course list
    contains request.course. Returns the notified user ids.
    """
    result = await db.execute(select(User).where(User.id != request.user_id))
    # Course lists are JSON; containment is checked here so the query stays portable.
    peers = [u for u in result.scalars().all() if request.course in (u.courses or [])]
    db.add_all(
        [
            Notification(
                user_id=peer.id,
                type=NotificationType.STUDY_REQUEST,
                title="New Study Partner Request",
                message=f"A student is looking for a study partner in {request.course}",
                related_request_id=request.id,
            )
            for peer in peers
        ]
    )
    await db.flush()
    logger.info("Request %s: notified %d course peers", request.id, len(peers))
    return [peer.id for peer in peers]


async def notify_match_confirmed(db: AsyncSession, match: Match) -> None:
    """Insert one match_confirmed notification for each participant."""
    db.add_all(
        [
            Notification(
                user_id=user_id,
                type=NotificationType.MATCH_CONFIRMED,
                title="Study Match Confirmed",
                message="You've been matched with a study partner!",
                related_request_id=match.request_id,
            )
            for user_id in (match.user_id_1, match.user_id_2)
        ]
    )
    await db.flush()


async def list_notifications(db: AsyncSession, user: User) -> list[Notification]:
    result = await db.execute(
        select(Notification)
        .options(selectinload(Notification.request))
        .where(Notification.user_id == user.id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    return list(result.scalars().all())


async def mark_read(db: AsyncSession, user: User, notification_id: int) -> Notification | None:
    """
    Set read=True on the user's notification. Idempotent. Returns None when no
    notification with that id belongs to the user (missing and foreign look the same).
    """
    result = await db.execute(
        select(Notification).where(Notification.id == notification_id, Notification.user_id == user.id)
    )
    notification = result.scalar_one_or_none()
    if notification is None:
        return None
    if not notification.read:
        notification.read = True
        await db.flush()
        await db.refresh(notification)
    return notification
